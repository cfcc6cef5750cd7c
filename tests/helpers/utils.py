import yaml
from pathlib import Path
from typing import Any

FIXTURES_DIR = Path(__file__).resolve().parents[1] / "fixtures"


def load_yaml(path: Path) -> Any:
    """Parse one fixture file; a missing file is a test-setup error."""
    if not path.exists():
        raise FileNotFoundError(f"Missing fixture: {path.relative_to(FIXTURES_DIR.parent)}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)
