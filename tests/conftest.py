import pytest

from bloom_text_encoder import Document

NUTHATCH = (
    "Sitta carolinensis. The white-breasted nuthatch (Sitta carolinensis) is a small that breeds in old-growth woodland across much "
    "of temperate North America. It is a stocky nuthatch with a large head, short tail, powerful bill, and strong feet. The upperparts are pale "
    "blue-gray, and the face and underparts are white. It has a black cap and a chestnut lower belly. The nine subspecies differ mainly in the "
    "color of the body plumage. Like other nuthatches, the white-breasted nuthatch forages for insects on trunks and branches and is able to move "
    "head-first down trees. Seeds form a substantial part of its winter diet, as do acorns and hickory nuts that were stored by the bird in the "
    "fall. The nest is in a hole in a tree, and a breeding pair may smear insects around the entrance as a deterrent to squirrels. Adults and "
    "their young may be killed by hawks, owls, and snakes, and forest clearance may lead to local habitat loss, but this is a common species with "
    "no major conservation concerns over most of its range. "
)


@pytest.fixture
def text():
    return NUTHATCH


@pytest.fixture
def doc():
    return Document.from_text(NUTHATCH)
