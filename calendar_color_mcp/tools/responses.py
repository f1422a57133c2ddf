"""JSON envelopes shared by all tools."""

import json


def success_response(data: dict) -> str:
    return json.dumps({"success": True, **data}, indent=2, ensure_ascii=False)


def error_response(message: str, **additional_data) -> str:
    return json.dumps(
        {"success": False, "error": message, **additional_data},
        indent=2,
        ensure_ascii=False,
    )
