from datetime import datetime
from fastapi import APIRouter, HTTPException, Request, UploadFile, File
from fastapi.responses import FileResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from services.outline_compiler import compile_outline
from services.ppt_builder import PPTBuilder
from services.prompt_engine import PromptEngine
from services.pdf_parser import parse_pdf
from services.brand_schema import BrandConfig, validate_brand_config, BRAND_PRESETS
from services.brand_store import brand_store
from services.content_templates import CONTENT_TEMPLATES
from utils.file_manager import save_generated, get_download_path, get_file_info
from core.logger import get_logger
from core.config import settings

router = APIRouter()
presentation_router = APIRouter(prefix="/api/presentation")
brand_router = APIRouter(prefix="/api/brand")
logger = get_logger("api.routes")

PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

async def read_json(request: Request) -> dict:
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return data

def require_content(data: dict) -> str:
    content = data.get("content")
    if not content or not isinstance(content, str):
        logger.error(f"Invalid content received: {content!r}")
        raise HTTPException(status_code=400, detail="Missing or invalid 'content'")
    return content

# --- Presentation ---

@presentation_router.post("/parse-content")
async def parse_content(request: Request):
    data = await read_json(request)
    deck = await run_in_threadpool(compile_outline, require_content(data))
    logger.info(f"Parsed content into {deck.slide_count} slides")
    return {"success": True, "parsed": deck.model_dump(mode="json")}

@presentation_router.post("/preview")
async def preview(request: Request):
    data = await read_json(request)
    deck = await run_in_threadpool(compile_outline, require_content(data))
    return {
        "success": True,
        "preview": deck.model_dump(mode="json"),
        "slide_count": deck.slide_count,
    }

@presentation_router.post("/generate")
async def generate_presentation(request: Request):
    data = await read_json(request)
    content = data.get("content")
    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise HTTPException(status_code=400, detail="'options' must be a JSON object")
    raw_brand_config = data.get("brand_config")

    if not raw_brand_config:
        raise HTTPException(status_code=400, detail="Brand configuration is required")
    try:
        brand_config = BrandConfig.model_validate(raw_brand_config)
    except ValidationError as e:
        logger.error(f"Invalid brand configuration: {e}")
        raise HTTPException(status_code=400, detail="Invalid brand configuration")

    source = content if isinstance(content, str) and content else options.get("prompt")
    if not source or not isinstance(source, str):
        raise HTTPException(status_code=400, detail="Content or prompt is required to generate a presentation")

    deck = await run_in_threadpool(compile_outline, source)
    logger.info(f"🎨 Generating PPTX '{deck.title}' ({deck.slide_count} slides) for brand '{brand_config.brand_name}'")

    try:
        builder = PPTBuilder(brand_config=brand_config)
        pptx_stream = await run_in_threadpool(builder.build, deck)
        file_name = save_generated(pptx_stream, deck.title)
    except Exception as e:
        logger.error(f"Failed to generate PPT: {e}")
        raise HTTPException(status_code=500, detail=f"PPTX generation failed: {e}")

    return {
        "success": True,
        "message": "Presentation generated successfully",
        "file_name": file_name,
        "download_url": f"/api/presentation/download/{file_name}",
        "metadata": {
            "slides": deck.slide_count,
            "generated_at": datetime.now().isoformat(),
            "brand": brand_config.brand_name or "Custom brand",
        },
    }

@presentation_router.get("/download/{file_name}")
def download_presentation(file_name: str):
    path = get_download_path(file_name)
    if not path:
        logger.error(f"Download requested for missing file: {file_name}")
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path, media_type=PPTX_MEDIA_TYPE, filename=file_name)

@presentation_router.get("/templates")
def get_content_templates():
    return {"success": True, "templates": CONTENT_TEMPLATES}

# --- Brand ---

@brand_router.post("/upload")
async def upload_brand_manual(brand_manual: UploadFile = File(...)):
    """Extract a brand configuration from an uploaded brand manual PDF"""
    filename = brand_manual.filename or ""
    if brand_manual.content_type != "application/pdf" and not filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Invalid file format. Only PDF files are allowed.")

    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    too_large = HTTPException(status_code=413, detail=f"File exceeds the {settings.max_upload_size_mb}MB limit")
    if brand_manual.size is not None and brand_manual.size > max_bytes:
        raise too_large

    # One byte past the limit is enough to reject uploads with no declared size
    data = await brand_manual.read(max_bytes + 1)
    if not data:
        raise HTTPException(status_code=400, detail="No file was uploaded")
    if len(data) > max_bytes:
        raise too_large

    try:
        parsed = await run_in_threadpool(parse_pdf, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        logger.info(f"🎨 Extracting brand configuration from {filename}")
        engine = PromptEngine()
        extraction = await run_in_threadpool(engine.extract_brand_config, parsed["text"])
    except ValueError as e:
        logger.error(f"Brand extraction failed for {filename}: {e}")
        raise HTTPException(
            status_code=502,
            detail="Could not extract the brand configuration. Check the API key or the manual format.",
        )

    return {
        "success": True,
        "message": "Brand manual processed successfully",
        "data": {
            "file": get_file_info(filename, brand_manual.content_type, len(data)),
            "parsing": {
                "pages": parsed["total_pages"],
                "words": parsed["statistics"]["total_words"],
            },
            "brand_config": extraction.brand_config.model_dump(),
            "confidence": extraction.confidence,
        },
    }

@brand_router.post("/config", status_code=201)
async def create_brand_config(request: Request):
    data = await read_json(request)
    brand_config = data.get("brand_config")
    if not brand_config:
        raise HTTPException(status_code=400, detail="Brand configuration is required")
    config = brand_store.create(brand_config, source=data.get("source", "manual"))
    return {
        "success": True,
        "message": "Brand configuration created",
        "data": {"config_id": config["id"], "config": config},
    }

@brand_router.get("/config/{config_id}")
def get_brand_config(config_id: int):
    try:
        return {"success": True, "data": brand_store.get(config_id)}
    except KeyError:
        raise HTTPException(status_code=404, detail="Brand configuration not found")

@brand_router.put("/config/{config_id}")
async def update_brand_config(config_id: int, request: Request):
    data = await read_json(request)
    try:
        config = brand_store.update(config_id, data.get("brand_config"))
    except KeyError:
        raise HTTPException(status_code=404, detail="Brand configuration not found")
    return {"success": True, "message": "Brand configuration updated", "data": config}

@brand_router.delete("/config/{config_id}")
def delete_brand_config(config_id: int):
    try:
        brand_store.delete(config_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Brand configuration not found")
    return {"success": True, "message": "Brand configuration deleted"}

@brand_router.get("/configs")
def list_brand_configs():
    configs = brand_store.list()
    return {"success": True, "data": {"configs": configs, "total": len(configs)}}

@brand_router.post("/validate")
async def validate_brand(request: Request):
    data = await read_json(request)
    brand_config = data.get("brand_config")
    if not brand_config or not isinstance(brand_config, dict):
        raise HTTPException(status_code=400, detail="Brand configuration is required for validation")
    return {"success": True, "data": validate_brand_config(brand_config).model_dump()}

@brand_router.get("/templates")
def get_brand_templates():
    return {"success": True, "data": BRAND_PRESETS}

router.include_router(presentation_router)
router.include_router(brand_router)
