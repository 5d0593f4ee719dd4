import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for `import wordlebot`
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def db_path(tmp_path):
    from wordlebot.models import close_db, init_db

    path = tmp_path / "wordle.db"
    init_db(str(path))
    yield path
    close_db()
