from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from datetime import datetime, timezone
import uuid

app = FastAPI(title="Mock Simulation Runner", version="1.0.0")
# Accepted submissions, newest last (process lifetime only)
SUBMISSIONS: list[dict] = []


class ScenarioTrigger(BaseModel):
    name: str
    growth_adjustment: float
    payroll_adjustment: float


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/webhook/scenario-runner", status_code=202)
def trigger(body: ScenarioTrigger):
    if not body.name.strip():
        raise HTTPException(status_code=422, detail="name must not be blank")
    submission = {"run_id": str(uuid.uuid4()), "received_at": datetime.now(timezone.utc).isoformat(), **body.model_dump()}
    SUBMISSIONS.append(submission)
    return submission
