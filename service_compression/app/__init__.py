"""
Compression exclusion settings for the HTTP compression layer.

This package decides, per request, whether a response must bypass
compression and which algorithm and level are preferred. It provides:

- app.rules: Rule model, CompressionSettings merge and matching.
- app.sources: XML and YAML configuration fragments and sources.
- app.provider: Resolve-or-default factories and the live SettingsProvider.

Guidelines:
- Build settings while loading configuration; never mutate a live instance.
- Malformed path rules fail the load; malformed preferences are ignored.
"""
