from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from prometheus_client import make_asgi_app
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncEngine
from typing import Optional
import logging

from hilltop.config import get_settings
from hilltop.core.clock import utcnow
from hilltop.database import database
from hilltop.database.models.resource import Category, Resource
from hilltop.observability.metrics import CatalogMetrics
from hilltop.observability.middleware import register_metrics_middleware

from hilltop.api import categories, contacts, health, resources
from hilltop.api.errors import fallback_router, register_error_handlers

settings = get_settings()
logger = logging.getLogger(__name__)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

DEFAULT_CATEGORIES = [
    ("CI/CD", "Continuous Integration and Continuous Deployment tools and practices", "GitBranch"),
    ("Kubernetes", "Container orchestration and management", "Container"),
    ("Monitoring", "Application and infrastructure monitoring solutions", "Activity"),
    ("Security", "DevOps security tools and best practices", "Shield"),
    ("Infrastructure", "Infrastructure as Code and cloud management", "Server"),
    ("Automation", "Automation tools and scripting solutions", "Zap"),
]

DEFAULT_RESOURCES = [
    ("Jenkins Pipeline Tutorial", "Comprehensive guide to building CI/CD pipelines with Jenkins",
     "https://jenkins.io/doc/book/pipeline/", "CI/CD", ["jenkins", "pipeline", "ci/cd"]),
    ("GitHub Actions Workflows", "Learn to automate your workflow with GitHub Actions",
     "https://docs.github.com/en/actions", "CI/CD", ["github", "actions", "automation"]),
    ("Kubernetes Basics", "Introduction to Kubernetes concepts and deployment",
     "https://kubernetes.io/docs/tutorials/", "Kubernetes", ["kubernetes", "containers", "orchestration"]),
    ("Helm Charts Guide", "Package manager for Kubernetes applications",
     "https://helm.sh/docs/", "Kubernetes", ["helm", "kubernetes", "packages"]),
    ("Prometheus Monitoring", "Open-source monitoring and alerting toolkit",
     "https://prometheus.io/docs/", "Monitoring", ["prometheus", "monitoring", "metrics"]),
    ("Grafana Dashboards", "Create beautiful monitoring dashboards",
     "https://grafana.com/docs/", "Monitoring", ["grafana", "dashboards", "visualization"]),
]


async def initialize_default_data(session):

    categories_by_name = {}
    for name, description, icon in DEFAULT_CATEGORIES:
        category = Category(name=name, description=description, icon=icon, created_at=utcnow())
        categories_by_name[name] = category
    session.add_all(categories_by_name.values())
    await session.flush()

    for title, description, url, category_name, tags in DEFAULT_RESOURCES:
        now = utcnow()
        session.add(Resource(
            title=title,
            description=description,
            url=url,
            category_id=categories_by_name[category_name].id,
            tags=tags,
            created_at=now,
            updated_at=now
        ))

    await session.commit()
    logger.info("Database initialized with default data")


def create_app(
    engine: Optional[AsyncEngine] = None,
    metrics: Optional[CatalogMetrics] = None,
    seed_default_data: Optional[bool] = None
) -> FastAPI:
    engine = engine or database.engine
    metrics = metrics or CatalogMetrics(
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT
    )
    if seed_default_data is None:
        seed_default_data = settings.SEED_DEFAULT_DATA

    @asynccontextmanager
    async def lifespan(app: FastAPI):

        logger.info("Starting application...")

        await database.init_db(engine)

        if seed_default_data:
            async with app.state.sessionmaker() as session:
                category_count = await session.scalar(select(func.count(Category.id)))

                if category_count == 0:
                    logger.info("Inserting default categories and resources...")
                    await initialize_default_data(session)

        logger.info(f"Application started in {settings.ENVIRONMENT} mode")

        yield

        logger.info("Shutting down application...")
        await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan
    )

    app.state.engine = engine
    app.state.sessionmaker = database.build_sessionmaker(engine)
    app.state.metrics = metrics

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_metrics_middleware(app)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(categories.router)
    app.include_router(resources.router)
    app.include_router(contacts.router)
    app.include_router(fallback_router)

    app.mount("/metrics", make_asgi_app(registry=metrics.registry))

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": f"{settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "docs": "/docs"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hilltop.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
