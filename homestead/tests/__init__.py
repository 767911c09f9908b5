"""Tests for the homestead package."""
