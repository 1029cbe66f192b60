# /run.py

import uvicorn

from product_api.config import get_host, get_port


def main():
  port = get_port()
  uvicorn.run("product_api.main:app", host=get_host(), port=port)


if __name__ == "__main__":
  main()
