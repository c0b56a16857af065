"""CLI package for splicedrum."""
