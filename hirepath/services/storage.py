"""Where uploaded resumes end up: a local directory or an S3 bucket."""
import os

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app
from werkzeug.utils import secure_filename


def _s3_client():
    # endpoint_url may be empty for AWS-managed S3
    s3_kwargs = {}
    endpoint = current_app.config.get('S3_ENDPOINT')
    if endpoint:
        s3_kwargs['endpoint_url'] = endpoint
    region = current_app.config.get('S3_REGION')
    if region:
        s3_kwargs['region_name'] = region
    return boto3.client(
        's3',
        aws_access_key_id=current_app.config.get('S3_ACCESS_KEY'),
        aws_secret_access_key=current_app.config.get('S3_SECRET_KEY'),
        config=Config(signature_version='s3v4', s3={'addressing_style': 'virtual'}),
        **s3_kwargs,
    )


def _save_local(file_storage, key):
    path = os.path.join(current_app.config['LOCAL_STORAGE_DIR'], key)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    file_storage.save(path)
    return f"file://{os.path.abspath(path)}"


def save_file(file_storage, prefix=""):
    """Store an uploaded file and return its ``file://`` or ``s3://`` URL."""
    filename = secure_filename(file_storage.filename) or "upload"
    key = f"{prefix}/{filename}" if prefix else filename

    if current_app.config.get('STORAGE_BACKEND', 'local') != 's3':
        return _save_local(file_storage, key)

    bucket = current_app.config.get('S3_BUCKET')
    try:
        _s3_client().upload_fileobj(file_storage.stream, bucket, key)
    except (BotoCoreError, ClientError):
        current_app.logger.exception('S3 upload of %s failed, keeping a local copy', key)
        file_storage.stream.seek(0)
        return _save_local(file_storage, key)
    return f"s3://{bucket}/{key}"
