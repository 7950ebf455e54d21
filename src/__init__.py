"""SofayManta backend-for-frontend."""
