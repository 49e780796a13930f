"""Files — safe access to the HTML files under the configured root."""
