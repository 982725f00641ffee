"""Rich renderables for the dashboard surfaces."""
