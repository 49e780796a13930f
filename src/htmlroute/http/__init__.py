"""HTTP — response envelopes and the formatter that builds them."""
