import uvicorn

from po_agent.config import settings

if __name__ == "__main__":
    uvicorn.run("po_agent.main:app", host=settings.host, port=settings.port)
