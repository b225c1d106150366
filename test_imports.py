#!/usr/bin/env python3
"""Test that all imports work correctly."""

import sys
sys.path.insert(0, 'src')


def test_imports():
    import workspec
    from api.main import app

    assert app.title == "WorkSpec API"
    assert workspec.compose_description([]) == ""
