"""
Rekognition Client
Outbound client for the biometric matching provider (AWS Rekognition).
One boto3 client is created at process start and shared by every request.
"""

import logging
from typing import List, Optional

import boto3
from botocore.config import Config as BotoConfig

from engines.identity.models import FaceMatchCandidate, ImageRef

logger = logging.getLogger(__name__)


class RekognitionClient:
    """
    Thin wrapper over the boto3 `rekognition` client.

    Provider exceptions (botocore ClientError / BotoCoreError) propagate
    unchanged; callers normalize them with the error taxonomy.
    """

    def __init__(self, collection_id, client=None, region='us-east-1',
                 aws_access_key=None, aws_secret_key=None,
                 quality_filter='AUTO', timeout=5.0):
        self.collection_id = collection_id
        self.quality_filter = quality_filter

        if client is None:
            client = boto3.client(
                'rekognition',
                aws_access_key_id=aws_access_key or None,
                aws_secret_access_key=aws_secret_key or None,
                region_name=region,
                config=BotoConfig(
                    connect_timeout=timeout,
                    read_timeout=timeout,
                    retries={'total_max_attempts': 1},
                ),
            )
            logger.info(f"Rekognition client initialized for collection '{collection_id}' in {region}")
        self.client = client

    def index_face(self, external_reference: str, image: ImageRef) -> Optional[float]:
        """
        Index the face in `image` under `external_reference`.

        Returns:
            Detection confidence (0-100) of the top indexed face, or None if
            the provider indexed no face at all.
        """
        response = self.client.index_faces(
            CollectionId=self.collection_id,
            ExternalImageId=external_reference,
            Image=image.to_provider(),
            QualityFilter=self.quality_filter,
            DetectionAttributes=['ALL'],
        )
        records = response.get('FaceRecords') or []
        if not records:
            return None
        return float(records[0].get('Face', {}).get('Confidence', 0.0))

    def search_faces(self, image: ImageRef, threshold: float, max_faces: int) -> List[FaceMatchCandidate]:
        """
        Search the collection for faces matching `image`.

        Returns:
            Candidates in provider order (highest similarity first).
        """
        response = self.client.search_faces_by_image(
            CollectionId=self.collection_id,
            FaceMatchThreshold=threshold,
            MaxFaces=max_faces,
            Image=image.to_provider(),
        )
        return [
            FaceMatchCandidate(
                external_reference=match.get('Face', {}).get('ExternalImageId', ''),
                confidence=float(match.get('Similarity', 0.0)),
            )
            for match in response.get('FaceMatches') or []
        ]

    def create_collection(self) -> str:
        """Create the face collection. Returns the collection ARN."""
        response = self.client.create_collection(CollectionId=self.collection_id)
        return response.get('CollectionArn', '')

    def close(self):
        """Release the underlying HTTP connection pool."""
        close = getattr(self.client, 'close', None)
        if close is not None:
            close()
