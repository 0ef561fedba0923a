"""Sign search and rescue members in and out and keep an attendance log."""
