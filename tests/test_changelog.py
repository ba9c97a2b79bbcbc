import os

from core.version import __version__


def test_changelog_lists_current_version():
    root = os.path.dirname(os.path.dirname(__file__))
    changelog = os.path.join(root, "CHANGELOG.md")
    assert os.path.exists(changelog), "CHANGELOG.md should exist"
    with open(changelog) as f:
        lines = f.readlines()
    assert any(line.strip() == f"## {__version__}" for line in lines)
    entries = [line for line in lines if line.strip().startswith("- ")]
    assert entries, "CHANGELOG.md should contain at least one bullet entry"
