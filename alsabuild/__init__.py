"""Resolve alsa-lib for a Cargo build: system library via pkg-config, or the vendored copy built with autotools."""
