# -*- coding: utf-8 -*-
"""
Pytest configuration and fixtures.
"""
import json

import pytest
from fastapi.testclient import TestClient

from rich_content.api import app
from rich_content.nodes import make_node


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def sample_nodes():
    """Protocol instructions mixing structural images and pasted <img> markup."""
    return [
        make_node("heading", [make_node("text", text="Preparation")], attrs={"level": 2}),
        make_node("paragraph", [
            make_node("text", text="Mix the "),
            make_node("text", text="powder", marks=[{"type": "bold"}]),
            make_node("text", text=" with water."),
        ]),
        make_node("image", attrs={"src": "https://cdn.example.com/step1.jpg", "alt": "Step 1"}),
        make_node("bulletList", [
            make_node("listItem", [
                make_node("paragraph", [
                    make_node("text", text='See <img src="https://cdn.example.com/step2.jpg" alt="Step 2">'),
                ]),
            ]),
        ]),
    ]


@pytest.fixture
def sample_stored(sample_nodes):
    """The sample document as the backend stores it (JSON string)."""
    return json.dumps(sample_nodes)


@pytest.fixture
def sample_protocol_record():
    """Stored protocol attributes with rich-text fields in mixed shapes."""
    shared = make_node("image", attrs={"src": "https://cdn.example.com/shared.jpg", "alt": "from ingredients"})
    return {
        "title": "Morning routine",
        "instructions": json.dumps([
            make_node("image", attrs={"src": "https://cdn.example.com/shared.jpg", "alt": "from instructions"}),
            make_node("image", attrs={"src": "https://cdn.example.com/instructions.jpg"}),
        ]),
        "ingredients": [make_node("paragraph", [shared])],
        "mechanism": {"type": "doc", "content": [
            make_node("image", attrs={"src": "https://cdn.example.com/mechanism.jpg"}),
        ]},
        "timeline": None,
        "disclaimer": "{corrupted",
    }
