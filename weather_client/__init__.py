"""
Weather client package.

Connects to the weather MCP server, displays its progress and log
notifications, and answers its sampling requests with a local Ollama model.
"""
