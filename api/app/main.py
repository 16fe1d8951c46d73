"""FastAPI app with Strawberry GraphQL."""

import logging

from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

from app.config import load_settings
from app.schema import schema

logging.basicConfig(
    level=load_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Valuation API", version="0.1.0")
graphql_app = GraphQLRouter(schema)
app.include_router(graphql_app, prefix="/graphql")


@app.get("/health")
def health() -> dict[str, str]:
    """Health check for load balancers and Docker."""
    return {"status": "ok"}
