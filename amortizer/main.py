from fastapi import FastAPI

from amortizer import __version__
from amortizer.api import api_router

app = FastAPI(
    title="Amortizer",
    description="Cronograma de amortización de préstamos a tasa fija.",
    version=__version__,
)
app.include_router(api_router)
