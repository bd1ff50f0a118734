import os, sys
import tempfile
import warnings
from pathlib import Path

# Add src/ (package) and tests/ (shared fakes) to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

# Ensure required environment variables for Core validation
os.environ.setdefault("DISCORD_API_TOKEN", "test-token")
os.environ.setdefault("GUILD_ID", "1")
os.environ.setdefault("CIRCLES_JOIN_CHANNEL", "500")
os.environ.setdefault("CIRCLES_PARENT_CATEGORY", "600")
os.environ.setdefault("CIRCLES_RECACHE_INTERVAL", "0")
os.environ.setdefault("CIRCLES_DB_PATH", str(Path(tempfile.gettempdir()) / "circle_bot_test.db"))

# Silence deprecation warnings surfaced from third-party dependencies during tests
warnings.filterwarnings(
    "ignore", category=DeprecationWarning, module=r"^discord\\.player$"
)
warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)


def pytest_configure(config):
    warnings.filterwarnings(
        "ignore", category=DeprecationWarning, module=r"^discord\\.player$"
    )
    warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)
