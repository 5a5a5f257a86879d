"""GraphQL to TypeScript declaration generator."""
