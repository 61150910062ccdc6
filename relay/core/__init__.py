"""Core components: config, client, assistant, inspector, errors."""
