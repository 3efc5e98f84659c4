"""IJ portfolio backend: Flask app, MongoDB storage and serverless adapter."""
