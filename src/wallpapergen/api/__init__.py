"""AI Wallpaper Generator: FastAPI REST API layer.

Modules
-------
main
    FastAPI application with all route handlers, the Gradio mount, and the
    ``main()`` CLI entry point.
models
    Pydantic models for API request and response validation.
"""
