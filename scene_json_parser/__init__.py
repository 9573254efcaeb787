"""Core logic for the Scene JSON Parser.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- parse a pasted or uploaded scene array
- group string fields by name across scenes
- format, select and export the grouped fields
- forward a field's text to Gemini for review
"""
