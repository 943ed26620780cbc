#!/usr/bin/env python3
"""
Create the Rekognition face collection used for enrollment and search.

Usage:
    python scripts/create_collection.py [collection_id]

Defaults to REKOGNITION_COLLECTION_ID from the environment / .env file.
"""

import sys
import os

from botocore.exceptions import BotoCoreError, ClientError

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Config
from engines.identity.taxonomy import normalize_provider_error
from services.rekognition_client import RekognitionClient


def create_collection(collection_id):
    """Create the collection; an existing one is reported, not treated as an error."""
    client = RekognitionClient(
        collection_id=collection_id,
        region=Config.AWS_REGION,
        aws_access_key=Config.AWS_ACCESS_KEY_ID,
        aws_secret_key=Config.AWS_SECRET_ACCESS_KEY,
        timeout=Config.PROVIDER_TIMEOUT,
    )

    try:
        arn = client.create_collection()
        print(f"✅ Created collection '{collection_id}': {arn}")
        return 0
    except ClientError as e:
        if e.response.get('Error', {}).get('Code') == 'ResourceAlreadyExistsException':
            print(f"⏭️  Collection '{collection_id}' already exists")
            return 0
        code, message = normalize_provider_error(e)
        print(f"❌ Could not create collection '{collection_id}': {code}: {message}")
        return 1
    except BotoCoreError as e:
        code, message = normalize_provider_error(e)
        print(f"❌ Could not reach Rekognition: {code}: {message}")
        return 1
    finally:
        client.close()


if __name__ == '__main__':
    collection_id = sys.argv[1] if len(sys.argv) > 1 else Config.REKOGNITION_COLLECTION_ID
    sys.exit(create_collection(collection_id))
