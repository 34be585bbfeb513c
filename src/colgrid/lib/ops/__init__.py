"""Operations shared by the CLI and MCP surfaces; modules self-register on import."""
