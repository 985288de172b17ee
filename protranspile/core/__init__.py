"""Core data model, configuration and filesystem helpers for protranspile"""
