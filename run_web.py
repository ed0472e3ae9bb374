#!/usr/bin/env python3
"""
Main entry point for the Poolside Stat Tracker web application.

This script launches the Flask-based web server.
"""
from poolside.config import AppConfig, configure_logging
from poolside.ui.web_app import run_web_app

if __name__ == "__main__":
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    run_web_app(config)
