# summitbook/main.py
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from summitbook.routes import checkout, razorpay, stripe_checkout
from summitbook.core.config import settings
from summitbook.core.database import create_tables
from dotenv import load_dotenv
import logging

load_dotenv()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Summitbook Checkout API",
    description="Pricing and payment checkout for mountain expedition bookings",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Invalid request payload",
            "details": jsonable_encoder(exc.errors()),
        },
    )

@app.on_event("startup")
async def startup_event():
    await create_tables()

app.include_router(checkout.router, prefix="/api/checkout", tags=["Checkout"])
app.include_router(razorpay.router, prefix="/api/razorpay", tags=["Razorpay"])
app.include_router(stripe_checkout.router, prefix="/api/stripe", tags=["Stripe"])

@app.get("/")
async def root():
    return {"message": "Summitbook Checkout API"}
