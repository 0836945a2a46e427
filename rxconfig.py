"""Reflex configuration for the freight back-office UI."""

import os

import reflex as rx

# Get port from environment
APP_PORT = int(os.getenv("FREIGHT_UI_PORT", "8000"))

config = rx.Config(
    app_name="freight_ui",
    # Use the src directory structure
    app_module_import="freight_ui.app",
    frontend_port=APP_PORT,
)
