"""Per-key RGB backlight programming for the HP 03f0:1f41 USB keyboard."""
