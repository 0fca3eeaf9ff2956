"""gql-lens: compact GraphQL schema context for LLM query generation."""

__version__ = "0.1.0"
