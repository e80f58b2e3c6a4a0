import logging
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel
from typing import Optional, List
from dotenv import load_dotenv
from pygments.styles import get_all_styles

from mdpygments.config import style as style_option
from mdpygments.errors import FormatError
from mdpygments.highlight import lookup_lexer
from mdpygments.markdown_renderer import render_markdown
from mdpygments.renderer import CodeBlockRenderer, new_renderer
from mdpygments.settings import RendererSettings, load_settings

# Load environment variables from .env file (MDPYGMENTS_STYLE etc.)
load_dotenv()

# Configure Logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("mdpygments")

settings = load_settings()

app = FastAPI(title="mdpygments")


class RenderRequest(BaseModel):
    """Markdown to render; unset fields fall back to the service settings."""
    text: str
    style: Optional[str] = None
    autodetect: Optional[bool] = None
    embed_css: Optional[bool] = None

class RenderResponse(BaseModel):
    """Response model for render endpoints."""
    content: str
    format: str

class LexerInfo(BaseModel):
    name: str
    aliases: List[str]
    filenames: List[str]


def renderer_for(req: RenderRequest, base: RendererSettings) -> CodeBlockRenderer:
    overrides = {k: v for k, v in req.model_dump(exclude={"text"}).items() if v is not None}
    return new_renderer(*base.model_copy(update=overrides).to_options())

# API Endpoints

@app.post("/api/render")
async def render(req: RenderRequest) -> RenderResponse:
    """
    Render markdown content as HTML with highlighted code blocks.

    Args:
        req: RenderRequest with markdown text and optional renderer overrides

    Returns:
        RenderResponse with HTML content
    """
    logger.info(f"RENDER Request: {len(req.text)} chars, style={req.style}")
    html = render_markdown(req.text, renderer_for(req, settings))
    return RenderResponse(content=html, format="html")

@app.get("/api/css")
async def css(style: Optional[str] = Query(default=None)) -> RenderResponse:
    """
    CSS rules for a style, for pages that link their own stylesheet.

    Unknown style names fall back to the default style.
    """
    name = style or settings.style
    logger.info(f"CSS Request: style='{name}'")
    renderer = new_renderer(*settings.to_options(), style_option(name))
    try:
        content = renderer.css()
    except FormatError as e:
        logger.error(f"CSS export failed for style '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return RenderResponse(content=content, format="css")

@app.get("/api/styles")
async def list_styles():
    return {"styles": sorted(get_all_styles())}

@app.get("/api/lexers/{name}")
async def get_lexer(name: str) -> LexerInfo:
    logger.info(f"LEXER Request: name='{name}'")
    lexer = lookup_lexer(name)
    if lexer is None:
        logger.warning(f"Lexer '{name}' not found.")
        raise HTTPException(status_code=404, detail="Lexer not found")
    return LexerInfo(name=lexer.name, aliases=list(lexer.aliases), filenames=list(lexer.filenames))
