from fastapi import FastAPI

from code_fixer.api import router as api_router

app = FastAPI(title="Code Fixer API")
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Code Fixer API running"}
