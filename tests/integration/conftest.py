from pathlib import Path

import pytest

ENCAPSULATION_TEMPLATE = """# Encapsulation

Encapsulation bundles data with the methods that operate on it.

```python
class Account:
    # {comment}
    def __init__(self, balance):
        self._balance = balance  # {trailing}

    def deposit(self, amount):
        self._balance += amount
```
"""

RESOURCE_DRIFT = """
# Resource Drift

Drift happens when live infrastructure diverges from its declared state.

- detect it with a scheduled plan
- fix it by re-applying the declared state
"""


def _write_reference_notes(notes_dir: Path) -> None:
    """Three near-duplicate guides; only one also covers resource drift."""
    variants = {
        "guide.md": ("keep the balance private", "hidden"),
        "notes.md": ("hide internal state", "protected attribute"),
        "reference.md": ("callers never touch this", "internal"),
    }
    for name, (comment, trailing) in variants.items():
        text = ENCAPSULATION_TEMPLATE.format(comment=comment, trailing=trailing)
        if name == "notes.md":
            text += RESOURCE_DRIFT
        (notes_dir / name).write_text(text, encoding="utf-8")


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """Directory holding the three reference guides."""
    path = tmp_path / "notes"
    path.mkdir()
    _write_reference_notes(path)
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "site"
