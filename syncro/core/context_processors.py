"""
Context processor exposing the per-browser UI state to every template.

Add to settings.py TEMPLATES['OPTIONS']['context_processors']:
    'syncro.core.context_processors.ui_state',
"""
from .ui_state import UIState


def ui_state(request):
    if not hasattr(request, "session"):
        return {"ui": UIState()}
    return {"ui": UIState.load(request)}
