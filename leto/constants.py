"""
Product constants for the Leto reader.

Default titles and texts used by the blank and demo reading states.
"""

PROJECT_NAME = "Leto"

DEFAULT_NEW_TITLE = "New Text"
DEFAULT_NEW_TEXT = (
    "Paste, type or upload the text you want to read. "
    "Press play when you are ready."
)

DEMO_TITLE = "Welcome to Leto"
DEMO_TEXT = (
    "Welcome to Leto, a free and modern speed reader. "
    "Instead of moving your eyes across the page, the words come to you, "
    "one after another, at the pace you choose. "
    "Most readers are surprised how quickly they get used to it. "
    "Start slow, find a comfortable speed and raise it a little every day. "
    "When you are ready, paste your own text, upload a file "
    "or extract an article straight from a website."
)
