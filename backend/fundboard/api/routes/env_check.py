"""Environment Check — reports which settings are configured, never their secret values."""

from fastapi import APIRouter

from fundboard.config import get_settings

router = APIRouter(prefix="/api/env-check", tags=["env"])


@router.get("")
async def env_check():
    settings = get_settings()
    return {
        "hasShopifyApiKey": bool(settings.shopify_api_key),
        "hasShopifyApiSecret": bool(settings.shopify_api_secret),
        "shopifyAppHostName": settings.shopify_app_url or None,
        "nextauthUrl": settings.nextauth_url or None,
        "hasNextauthSecret": bool(settings.nextauth_secret),
        "supabaseUrl": settings.supabase_url or None,
        "hasSupabaseAnonKey": bool(settings.supabase_anon_key),
    }
