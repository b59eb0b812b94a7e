"""Gradio front end for the AI Wallpaper Generator."""
