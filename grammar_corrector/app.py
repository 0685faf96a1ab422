from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

try:
    from .corrector import process_text
    from .errors import ConfigurationError, normalize_error
    from .host import RecordingHost
    from .prompts import Action, DEFAULT_ACTION
    from .providers.registry import ProviderRegistry
    from .settings import CorrectorOptions, load_env_file
except ImportError:  # fallback for running as a top-level module
    from grammar_corrector.corrector import process_text
    from grammar_corrector.errors import ConfigurationError, normalize_error
    from grammar_corrector.host import RecordingHost
    from grammar_corrector.prompts import Action, DEFAULT_ACTION
    from grammar_corrector.providers.registry import ProviderRegistry
    from grammar_corrector.settings import CorrectorOptions, load_env_file

APP_VERSION = "0.1.0"

# dev convenience; never overrides the real environment
load_env_file()


class Health(BaseModel):
    status: str


class VersionInfo(BaseModel):
    version: str
    openai_enabled: bool
    gemini_enabled: bool
    default_provider: str
    models: Dict[str, str]


class CorrectBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    action: Optional[str] = None
    copy_result: bool = Field(False, alias="copy")
    options: Optional[Dict[str, Any]] = None


class CorrectResult(BaseModel):
    delivered: bool
    text: Optional[str] = None
    action: Optional[str] = None
    provider: Optional[str] = None
    clipboard: Optional[str] = None
    notices: List[str] = []


def get_options(overrides: Optional[Dict[str, Any]] = None) -> CorrectorOptions:
    return CorrectorOptions.from_env(**(overrides or {}))


app = FastAPI(title="Grammar Corrector", version=APP_VERSION)


@app.get("/health", response_model=Health)
async def health():
    return Health(status="ok")


@app.get("/version", response_model=VersionInfo)
async def version():
    try:
        o = get_options()
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=normalize_error(e))
    reg = ProviderRegistry(o)
    return VersionInfo(
        version=APP_VERSION,
        openai_enabled=reg.openai_enabled,
        gemini_enabled=reg.gemini_enabled,
        default_provider=o.default_provider,
        models={"openai": o.openai_model, "gemini": o.gemini_model},
    )


@app.get("/actions")
async def actions():
    return {"actions": [a.value for a in Action], "default": DEFAULT_ACTION.value}


@app.post("/correct", response_model=CorrectResult)
async def correct(body: CorrectBody):
    # nothing touches an OS clipboard here; the host just records what happened
    host = RecordingHost()
    try:
        options = get_options(body.options)
    except ConfigurationError as e:
        host.show_text(normalize_error(e))
        return CorrectResult(delivered=False, notices=host.notices)
    outcome = await process_text(host, body.text, body.action, options, copy=body.copy_result)
    return CorrectResult(
        delivered=outcome.delivered,
        text=outcome.text,
        action=outcome.action,
        provider=outcome.provider.value if outcome.provider else None,
        clipboard=host.clipboard,
        notices=host.notices,
    )
