from fastapi import FastAPI
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging
from app.db.base import Base, engine
from app.db.models import booking, category, review, service, user  # noqa: F401  register tables
from app.api.routes import analytics as analytics_router


configure_logging()

app = FastAPI()
register_exception_handlers(app)

@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)

@app.get("/")
def root():
    return {"message": "Service Booking Platform API running"}


app.include_router(analytics_router.router)
