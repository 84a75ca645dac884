from .validation import SchemaValidationError, load_schema, validate_payload, validation_errors

__all__ = ["SchemaValidationError", "load_schema", "validate_payload", "validation_errors"]
