"""
cypherlink: async client for Neo4j's transactional Cypher REST endpoint.
"""

__version__ = "0.1.0"
