"""Mode selection and prompt templates."""
