from fastapi import FastAPI, UploadFile, File, HTTPException
from .errors import ParseError
from .models import ConvertResponse, HealthResponse
from .convert import convert_json_bytes

app = FastAPI(
    title="actor-csv",
    description="Fixed-schema CSV export of EUDAMED actor JSON for spreadsheet tools",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/convert", response_model=ConvertResponse)
async def convert_json(file: UploadFile = File(...)):
    if not file.filename or not file.filename.lower().endswith(".json"):
        raise HTTPException(status_code=422, detail="Only JSON files are supported")

    raw = await file.read()
    try:
        return convert_json_bytes(raw, file.filename)
    except ParseError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
