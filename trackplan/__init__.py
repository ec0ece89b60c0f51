"""Tracking plan service: versioned analytics event definitions per platform."""
