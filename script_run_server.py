"""Script para iniciar o servidor FastAPI (porta via PORT, padrão 8000)."""
import os
import sys

# Adiciona o diretório atual ao path
sys.path.insert(0, os.path.dirname(__file__))

if __name__ == "__main__":
    import uvicorn
    from app.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
