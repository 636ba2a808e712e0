import json
from typing import Any

utf8_bom = "\ufeff"

def normalize_text(text: str) -> str:
    # removes a leading byte order mark and converts windows line endings.
    if text.startswith(utf8_bom):
        text = text[len(utf8_bom):]
    return text.replace("\r\n", "\n")

def parse_json_or_text(text: str) -> Any:
    # returns the decoded json value, or the text itself when it is not json.
    try:
        return json.loads(text)
    except ValueError:
        return text
