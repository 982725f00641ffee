"""Terminal UI for logtop: file registry, tail extraction, views and main loop."""
