"""Local pytest configuration shared by the package test suites."""

pytest_plugins = ["ethereum_tx_logging.logging"]
