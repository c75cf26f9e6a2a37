"""Terminal output helpers with colors."""

# Colors
RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
CYAN = "\033[0;36m"
GRAY = "\033[90m"
MAGENTA = "\033[0;35m"
NC = "\033[0m"

TAG = "[git-x]"


def log(msg: str) -> None:
    print(f"\r\033[K{BLUE}{TAG}{NC} {msg}")


def success(msg: str) -> None:
    print(f"\r\033[K{GREEN}{TAG}{NC} {msg}")


def warn(msg: str) -> None:
    print(f"\r\033[K{YELLOW}{TAG}{NC} {msg}")


def error(msg: str) -> None:
    print(f"\r\033[K{RED}{TAG}{NC} {msg}")


def detail(msg: str) -> None:
    """Indented gray line under a log message."""
    print(f"  {GRAY}{msg}{NC}")
