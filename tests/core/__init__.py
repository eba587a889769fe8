"""Pure domain tests: entity, age arithmetic, validation, errors."""
