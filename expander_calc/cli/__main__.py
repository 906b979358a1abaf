from expander_calc.cli.main import main

main()
