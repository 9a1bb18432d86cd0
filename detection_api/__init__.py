"""Deepfake Detection API server package."""
