"""Command-line interface for protranspile"""
