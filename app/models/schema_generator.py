"""
JSON Schema generator for the financial profile model.

This module provides utilities to generate the JSON schema that front ends
validate profiles against, and to save it to a file.
"""

import json
from pathlib import Path
from typing import Any, Dict

from .profile import FinancialProfile


def generate_profile_schema() -> Dict[str, Any]:
    """Generate JSON schema for the FinancialProfile model (camelCase keys)."""
    schema = FinancialProfile.model_json_schema(by_alias=True)

    schema.update(
        {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "Net Worth Projection Profile Schema v0.1",
            "description": "Schema for projection profiles including personal parameters, assets, liabilities, incomes, expenses, and portfolio settings",
        }
    )
    return schema


def save_profile_schema(output_path: Path) -> None:
    """Save the profile JSON schema to a file."""
    schema = generate_profile_schema()

    with open(output_path, "w") as f:
        json.dump(schema, f, indent=2)


if __name__ == "__main__":
    schema_path = Path(__file__).parent.parent.parent / "schema" / "profile_v0_1.json"
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    save_profile_schema(schema_path)
    print(f"Schema saved to {schema_path}")
