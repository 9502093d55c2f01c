"""Pure transforms and the async services that drive them."""
