"""Core logic for JSON Field Reader.

The Gradio UI lives in `app.py` and the command line in `cli.py`. This package
contains pure functions that:
- compile jq-like query expressions and apply them to JSON documents
- sanitize the matched raw values into numeric readings
- populate field collections and report them sorted by name
"""
