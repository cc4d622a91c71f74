import sys
import pytest
from pathlib import Path

# Racine du projet dans sys.path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from data_manager.excel_handler import init_excel  # noqa: E402


@pytest.fixture
def temp_excel(tmp_path):
    """Classeur temporaire initialisé"""
    filepath = tmp_path / "test_data.xlsx"
    init_excel(filepath)
    return filepath
