from fastapi import FastAPI
from plethon.api.public import router as public_router

app = FastAPI(title="plethon public api")
app.include_router(public_router)
