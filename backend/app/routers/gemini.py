from fastapi import APIRouter, HTTPException
from ..gemini_client import GeminiClient, GeminiConfigError, GeminiError

router = APIRouter(tags=["gemini"])

@router.get("/models")
async def list_models():
	try:
		client = GeminiClient()
	except GeminiConfigError as e:
		raise HTTPException(status_code=500, detail=str(e))
	try:
		return await client.list_models()
	except GeminiError as e:
		raise HTTPException(status_code=502, detail=str(e))
	finally:
		await client.aclose()
