"""Payments app package: one payment record per reservation."""
