# Database connection for Aurora Serverless RDS and local PostgreSQL
import json
import logging
import os
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine.url import URL
from sqlalchemy.orm import scoped_session, sessionmaker

from app.common.exceptions import DatabaseConfigurationException

STAGE = os.getenv("STAGE", "local").lower()
AWS_REGION = os.getenv("REGION", "us-east-1")

DATABASE_URL = os.getenv("DATABASE_URL")

POSTGRES_USER = os.getenv("POSTGRES_USER")
POSTGRES_DB = os.getenv("POSTGRES_DB")
POSTGRES_PW = os.getenv("POSTGRES_PASSWORD", "")  # only used for local dev
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = int(os.getenv("POSTGRES_PORT", "5432"))


def get_rds_master_password() -> str:
    """
    Retrieve Aurora Serverless master password from Secrets Manager.
    """
    secret_arn = os.getenv("RDS_SECRET_ARN")
    if not secret_arn:
        raise DatabaseConfigurationException("RDS_SECRET_ARN must be set for RDS connections")

    secrets_client = boto3.client("secretsmanager", region_name=AWS_REGION)
    try:
        response = secrets_client.get_secret_value(SecretId=secret_arn)
    except (BotoCoreError, ClientError) as e:
        raise DatabaseConfigurationException(f"Unable to read RDS master password: {e}") from e
    secret = json.loads(response["SecretString"])
    return secret["password"]


def make_base_url() -> str:
    """
    Build connection URL for Aurora Serverless RDS or local PostgreSQL.
    DATABASE_URL wins when it is set.
    """
    if DATABASE_URL:
        return DATABASE_URL

    if STAGE in ["local", "test"]:
        url = URL.create(
            drivername="postgresql+psycopg2",
            username=POSTGRES_USER,
            password=POSTGRES_PW,
            host=POSTGRES_HOST,
            port=POSTGRES_PORT,
            database=POSTGRES_DB,
        )
        return url.render_as_string(hide_password=False)

    rds_endpoint = os.getenv("RDS_ENDPOINT")
    if not rds_endpoint:
        raise DatabaseConfigurationException("RDS_ENDPOINT must be set")
    url = URL.create(
        drivername="postgresql+psycopg2",
        username=POSTGRES_USER,
        password="",
        host=rds_endpoint,
        port=5432,
        database=POSTGRES_DB,
    )
    return url.render_as_string(hide_password=False)


def make_connect_args() -> dict:
    """
    For local: use password.
    For dev/prod: use master password from Secrets Manager (same as bastion host).
    """
    if DATABASE_URL:
        return {}
    if STAGE in ["local", "test"]:
        return {"sslmode": "disable"}
    password = get_rds_master_password()
    return {"password": password, "sslmode": "require"}


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_engine(
        make_base_url(),
        connect_args=make_connect_args(),
        pool_pre_ping=True,
        future=True,
    )


@lru_cache(maxsize=1)
def get_session_registry() -> scoped_session:
    return scoped_session(
        sessionmaker(
            bind=get_engine(),
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            future=True,
        )
    )


def SessionLocal():
    return get_session_registry()()


# set SQLAlchemy logs to only error
logging.basicConfig()
logging.getLogger("sqlalchemy").setLevel(logging.ERROR)
