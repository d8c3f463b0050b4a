"""spendlog - A simple income and expense tracker."""
