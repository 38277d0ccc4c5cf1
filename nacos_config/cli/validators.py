"""Input validation for CLI arguments."""
import re
import sys

# Nacos accepts only these characters in data ids and groups
NACOS_NAME_PATTERN = r'^[a-zA-Z0-9._:-]+$'


def validate_nacos_name(kind: str, name: str) -> None:
    """
    Validate a data id or group matches Nacos requirements.

    Nacos allows only: [a-zA-Z0-9._:-]

    Args:
        kind: What is being validated ("data id" or "group"), for messages
        name: Value to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print(f"Error: Nacos {kind} cannot be empty", file=sys.stderr)
        print("\nNacos names must match: [a-zA-Z0-9._:-]", file=sys.stderr)
        sys.exit(2)

    if not re.match(NACOS_NAME_PATTERN, name):
        print(f"Error: Invalid Nacos {kind} '{name}'", file=sys.stderr)
        print("\nAllowed characters: letters, numbers, dots (.), colons (:), underscores (_), hyphens (-)", file=sys.stderr)
        print("Not allowed: spaces, slashes, special characters (@, $, !, etc.)", file=sys.stderr)
        print("\nExamples of valid names:", file=sys.stderr)
        print("  ✓ app.json", file=sys.stderr)
        print("  ✓ DEFAULT_GROUP", file=sys.stderr)
        print("  ✓ order-service:prod.yaml", file=sys.stderr)
        sys.exit(2)
