from fastapi import APIRouter

# Auth
from app.api.routes.auth import router as auth_router

# Catalog
from app.api.routes.events import router as events_router
from app.api.routes.movies import router as movies_router
from app.api.routes.theaters import router as theaters_router
from app.api.routes.showtimes import router as showtimes_router
from app.api.routes.venues import router as venues_router

# Bookings & user stats
from app.api.routes.bookings import router as bookings_router
from app.api.routes.user import router as user_router

api_router = APIRouter()

# --- Auth ---
api_router.include_router(auth_router)

# --- Catalog ---
api_router.include_router(events_router)
api_router.include_router(movies_router)
api_router.include_router(theaters_router)
api_router.include_router(showtimes_router)
api_router.include_router(venues_router)

# --- Bookings & stats ---
api_router.include_router(bookings_router)
api_router.include_router(user_router)
