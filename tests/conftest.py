import os, sys
import warnings
from pathlib import Path

# Add the src/ layout to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Ensure config sections resolve without a real .env or config.toml
os.environ.setdefault("DISCORD_API_TOKEN", "test-token")
os.environ.setdefault("DISCORD_API_BASE", "https://discord.test/api/v10")

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
