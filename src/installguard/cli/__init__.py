"""InstallGuard command-line interface."""
