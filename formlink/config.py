"""Defaults and environment variable names."""

DEFAULT_FORM_DATA_KEY = "formData"

FORM_DATA_KEY_ENV = "FORMLINK_FORM_DATA_KEY"
