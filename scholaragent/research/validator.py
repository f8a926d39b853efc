import asyncio
from collections.abc import Sequence

from scholaragent.errors import ConfigurationError
from scholaragent.models import Reference
from scholaragent.utils.logger import logger

from .progress import NullProgressListener, ProgressListener
from .resolver import BibliographicResolver

# None = one in-flight resolution per reference
DEFAULT_VALIDATION_CONCURRENCY: int | None = None


class ReferenceValidator:
	def __init__(self, resolver: BibliographicResolver, max_concurrency: int | None = DEFAULT_VALIDATION_CONCURRENCY):
		if max_concurrency is not None and max_concurrency < 1:
			raise ConfigurationError(f'Validation concurrency must be at least 1, got {max_concurrency}')
		self.resolver = resolver
		self.max_concurrency = max_concurrency

	async def validate_batch(
		self, references: Sequence[Reference], listener: ProgressListener | None = None
	) -> list[Reference]:
		"""Resolve every reference concurrently; the result is in input order."""
		listener = listener or NullProgressListener()
		total = len(references)
		if not total:
			return []

		semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
		completed = 0

		async def validate_one(reference: Reference) -> Reference:
			nonlocal completed
			try:
				if semaphore is None:
					result = await self.resolver.resolve(reference)
				else:
					async with semaphore:
						result = await self.resolver.resolve(reference)
			except Exception as e:
				logger.warning(f'Validation failed for "{reference.title[:60]}": {e}')
				reference.is_verified = False
				result = reference

			completed += 1
			listener.on_validation_progress(completed, total, result.title)
			return result

		logger.info(f'Validating {total} references...')
		validated = await asyncio.gather(*(validate_one(reference) for reference in references))

		verified = sum(1 for r in validated if r.is_verified)
		logger.info(f'Validation complete: {verified} verified, {total - verified} unverified')
		return list(validated)
