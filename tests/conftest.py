import json
import pathlib
import pytest


@pytest.fixture(scope="session")
def repo_root():
    """Return the root directory of the project."""
    return pathlib.Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def fixtures_dir(repo_root):
    """Return the directory holding sample note exports."""
    return repo_root / "tests" / "fixtures"


@pytest.fixture
def make_notes(tmp_path):
    """Write numbered single-note JSON files into a resources directory."""
    def _make_notes(count, resources_dir=None):
        resources_dir = resources_dir or tmp_path / "resources"
        resources_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for i in range(count):
            path = resources_dir / f"note_{i:04d}.json"
            path.write_text(json.dumps({"title": f"Note {i}"}), encoding="utf-8")
            paths.append(path)
        return paths
    return _make_notes
