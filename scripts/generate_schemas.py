"""Generate the receipt JSON schema from the Pydantic model and save it to schemas/."""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rcpt.receipt import Receipt


def generate_schemas(schemas_dir: Path = None) -> Path:
    """Generate JSON schemas for all models."""
    if schemas_dir is None:
        schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Serialization mode: timestamps are emitted as strings
    receipt_schema = Receipt.model_json_schema(mode="serialization")
    receipt_schema_path = schemas_dir / "receipt.schema.json"
    with open(receipt_schema_path, 'w', encoding='utf-8') as f:
        json.dump(receipt_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {receipt_schema_path}")

    print("\nSchema generation complete!")
    return receipt_schema_path


if __name__ == "__main__":
    generate_schemas()
