"""Fact plugins bundled with hostfacts. Each subpackage is one category."""
