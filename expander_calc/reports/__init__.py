"""Result formatting and report generation."""
