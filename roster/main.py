from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from .cards import TEMPLATES_DIR, render_google_card
from .config import Settings
from .errors import RosterError
from .models import HealthResponse, MemberRecord, MembersResponse, WalletCardRequest
from .pipeline import RosterPipeline

app = FastAPI(
    title="roster-normalizer",
    description="Membership roster feed ingestion and wallet card payloads",
    version="0.1.0",
)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_settings() -> Settings:
    return Settings.from_env()


def get_pipeline(settings: Settings = Depends(get_settings)) -> RosterPipeline:
    return RosterPipeline.from_settings(settings)


def load_members(pipeline: RosterPipeline = Depends(get_pipeline)) -> List[MemberRecord]:
    return pipeline.load_members()


@app.exception_handler(RosterError)
async def roster_error_handler(request: Request, exc: RosterError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/", response_class=HTMLResponse)
def home(request: Request, members: List[MemberRecord] = Depends(load_members)):
    return templates.TemplateResponse(request, "home.html", {"members": members})


@app.get("/members", response_model=MembersResponse)
def list_members(members: List[MemberRecord] = Depends(load_members)):
    return {"count": len(members), "members": members}


@app.get("/card/generate_google")
def generate_google_card(
    first_name: str = Query(default="", alias="firstName"),
    last_name: str = Query(default="", alias="lastName"),
    expiration_date: str = Query(default="", alias="ExpirationDate"),
    settings: Settings = Depends(get_settings),
):
    card = WalletCardRequest(
        first_name=first_name,
        last_name=last_name,
        expiration_date=expiration_date,
    )
    return render_google_card(card, class_id=settings.google_class_id)


@app.get("/card/generate_apple")
def generate_apple_card():
    raise HTTPException(status_code=501, detail="Not implemented yet")
