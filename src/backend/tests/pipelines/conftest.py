import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import pipelines...` work when running this folder alone.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from pathlib import Path

import pytest

SCREENS = {
    "index.html": "<html><body><a href='home/SCR-DASH-001-home.html'>Start</a></body></html>",
    "home/SCR-DASH-001-home.html": (
        "<html><body>"
        "<button class='w-12 h-12' onclick=\"location.href='../vocab/SCR-VOCAB-001-list.html'\">Words</button>"
        "<button class='w-12 h-12' onclick=\"location.href='../train/SCR-TRAIN-001-select.html'\">Train</button>"
        "</body></html>"
    ),
    "vocab/SCR-VOCAB-001-list.html": (
        "<html><body>"
        "<button class='w-8 h-8' onclick=\"location.href='../train/SCR-TRAIN-001-select.html'\">Quiz</button>"
        "<button class='w-12 h-12' id='btn_delete' onclick=\"removeWord()\">Delete word</button>"
        "</body></html>"
    ),
    "train/SCR-TRAIN-001-select.html": (
        "<html><body>"
        "<a class='w-12 h-12' href='../home/SCR-DASH-001-home.html'>Back</a>"
        "</body></html>"
    ),
    "shared/screen-template.html": "<html><body><a href='#'>template</a></body></html>",
    "docs/notes.html": "<html><body><button>x</button></body></html>",
}


@pytest.fixture
def screens_root(tmp_path: Path) -> Path:
    for rel, html in SCREENS.items():
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    return tmp_path
