import logging
from fastapi import FastAPI
from group_ledger.config import get_settings
from group_ledger.api.v1.routes.ledger import router as ledger_router

logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Group Ledger - Debt Netting",
    description="Nets shared expenses and settlements into balances and settlement suggestions",
    version="1.0.0"
)

app.include_router(ledger_router)

@app.get("/")
def read_root():
    return {"message": "Group Ledger API", "version": "1.0.0"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}
