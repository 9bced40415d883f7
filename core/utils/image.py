import os
from pathlib import Path
import requests
from urllib.parse import urlparse
import logging
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError
from io import BytesIO

logger = logging.getLogger(__name__)

DEFAULT_COVERS_DIR = 'data/covers'

class CoverDownloader:
    def __init__(self, base_dir: Optional[str] = None, max_height: int = 500, timeout: float = 10):
        """Initialize the cover downloader.

        Args:
            base_dir: Directory covers are written to. Defaults to the
                CATALOG_COVERS_DIR environment variable, then data/covers
            max_height: Covers taller than this are scaled down
            timeout: Request timeout in seconds
        """
        self.base_dir = Path(base_dir or os.getenv('CATALOG_COVERS_DIR', DEFAULT_COVERS_DIR))
        self.max_height = max_height
        self.timeout = timeout

    def _process_image(self, image_data: bytes) -> bytes:
        """Convert the image to JPEG and bound its height.

        Args:
            image_data: Raw image bytes

        Returns:
            Processed image as bytes
        """
        img = Image.open(BytesIO(image_data))

        # Convert to RGB if necessary (e.g., if PNG with transparency)
        if img.mode in ('RGBA', 'P', 'LA'):
            img = img.convert('RGB')

        if img.height > self.max_height:
            ratio = self.max_height / img.height
            new_width = max(1, int(img.width * ratio))
            img = img.resize((new_width, self.max_height), Image.Resampling.LANCZOS)

        output = BytesIO()
        img.save(output, format='JPEG', quality=85, optimize=True)
        return output.getvalue()

    def _validate_image(self, content: bytes, content_type: str) -> bool:
        """Validate that the content is actually an image"""
        if not content_type.startswith('image/'):
            return False

        image_headers = {
            b'\xff\xd8\xff',  # JPEG
            b'\x89PNG\r\n',   # PNG
            b'GIF87a',        # GIF
            b'GIF89a',        # GIF
            b'RIFF'           # WEBP
        }

        return any(content.startswith(header) for header in image_headers)

    def download(
        self,
        url: str,
        identifier: str,
        force_update: bool = False
    ) -> Tuple[bool, Optional[str]]:
        """
        Download a cover and save it as <base_dir>/<identifier>.jpg

        Args:
            url: The URL of the cover image
            identifier: Filename stem, normally the book id
            force_update: If True, overwrite an existing file

        Returns:
            Tuple of (success: bool, local_path: Optional[str])
        """
        if not url or urlparse(url.strip()).scheme not in ('http', 'https'):
            return False, None

        file_path = self.base_dir / f"{identifier}.jpg"
        if file_path.exists() and not force_update:
            return True, str(file_path)

        try:
            response = requests.get(url.strip(), timeout=self.timeout)
            response.raise_for_status()

            content_type = response.headers.get('content-type', 'image/jpeg')
            if not self._validate_image(response.content, content_type):
                logger.warning(f"Content at {url} is not an image ({content_type})")
                return False, None

            processed_image = self._process_image(response.content)

            self.base_dir.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'wb') as f:
                f.write(processed_image)

            return True, str(file_path)

        except requests.RequestException as e:
            logger.error(f"Error downloading cover from {url}: {str(e)}")
            return False, None
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Error processing cover from {url}: {str(e)}")
            return False, None
