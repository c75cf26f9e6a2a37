"""Input validation for branch names and refs. Pure checks, no git calls."""

from gitx.exceptions import ValidationError

INVALID_BRANCH_CHARS = (" ", "~", "^", ":", "?", "*", "[", "\\")

BRANCH_NAME_RULES = [
    "Cannot be empty",
    "Cannot start with a dash",
    "Cannot be 'HEAD'",
    "Cannot contain spaces",
    "Cannot contain ~^:?*[\\",
    "Cannot contain '..'",
]


def validate_branch_name(name: str) -> None:
    """Raise ValidationError naming the first rule the branch name breaks."""
    if not name:
        raise ValidationError("Branch name cannot be empty", rule="empty")
    if name.startswith("-"):
        raise ValidationError(f"Branch name '{name}' cannot start with '-'", rule="leading-dash")
    if name == "HEAD":
        raise ValidationError("Branch name 'HEAD' is reserved", rule="reserved")
    bad = [c for c in INVALID_BRANCH_CHARS if c in name]
    if bad:
        shown = " ".join("space" if c == " " else c for c in bad)
        raise ValidationError(
            f"Branch name '{name}' contains invalid characters: {shown}", rule="invalid-chars"
        )
    if ".." in name:
        raise ValidationError(f"Branch name '{name}' cannot contain '..'", rule="double-dot")


def validate_ref(ref: str) -> None:
    """Reject refs that git would read as an option or that are blank."""
    if not ref or not ref.strip():
        raise ValidationError("Reference cannot be empty", rule="empty")
    if ref.startswith("-"):
        raise ValidationError(f"Reference '{ref}' cannot start with '-'", rule="leading-dash")
    if any(c.isspace() for c in ref):
        raise ValidationError(f"Reference '{ref}' cannot contain whitespace", rule="whitespace")
