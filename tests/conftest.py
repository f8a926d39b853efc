import pytest

from scholaragent.models import AgentDescriptor


@pytest.fixture
def publisher_roster():
	return [
		AgentDescriptor('IEEE Xplore', 'Search ONLY IEEE venues.'),
		AgentDescriptor('Springer Nature', 'Search ONLY Springer venues.'),
		AgentDescriptor('Elsevier', 'Search ONLY Elsevier venues.'),
		AgentDescriptor('General', 'Search ACM, Wiley and arXiv.', preprint_aware=True),
	]


@pytest.fixture
def recorded_sleeps():
	waits = []

	async def sleep(seconds):
		waits.append(seconds)

	sleep.waits = waits
	return sleep
