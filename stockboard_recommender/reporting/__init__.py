"""
stockboard_recommender.reporting: serialization and display of ranked lists.

Modules:
  export    : camelCase JSON payloads for request handlers + file export.
  formatters: ASCII terminal tables for Typer CLI commands.
"""
