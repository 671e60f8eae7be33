"""Portfolio rebalancer MCP server."""
