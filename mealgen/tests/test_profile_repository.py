import json

import pytest

from mealgen.domain.Errors import ContractValidationError, StoreError
from mealgen.infra.Profile_Repository import InMemoryProfileRepository, JsonProfileRepository
from fakes import SAMPLE_PROFILE


def test_missing_store_means_no_profile(tmp_path):
    repo = JsonProfileRepository(tmp_path / "profiles.json")
    assert repo.get_profile("default-user") is None


def test_save_then_get_round_trip(tmp_path):
    repo = JsonProfileRepository(tmp_path / "profiles.json")
    repo.save_profile("default-user", SAMPLE_PROFILE)

    loaded = repo.get_profile("default-user")
    assert loaded.to_dict() == SAMPLE_PROFILE
    # Persisted as camelCase JSON keyed by user id
    on_disk = json.loads((tmp_path / "profiles.json").read_text(encoding="utf-8"))
    assert on_disk == {"default-user": SAMPLE_PROFILE}


def test_save_overwrites_instead_of_merging(tmp_path):
    repo = JsonProfileRepository(tmp_path / "profiles.json")
    repo.save_profile("u1", SAMPLE_PROFILE)
    replacement = {"age": 35, "gender": "Female", "activityLevel": "Very Active"}
    repo.save_profile("u1", replacement)

    loaded = repo.get_profile("u1")
    assert loaded.to_dict() == replacement
    assert loaded.location is None
    assert loaded.health_goals is None


def test_profiles_are_kept_per_user(tmp_path):
    repo = JsonProfileRepository(tmp_path / "profiles.json")
    repo.save_profile("alice", SAMPLE_PROFILE)
    repo.save_profile("bob", {"age": 61, "gender": "Male", "activityLevel": "Sedentary"})

    assert repo.get_profile("alice").age == 34
    assert repo.get_profile("bob").age == 61
    assert repo.get_profile("carol") is None


def test_corrupt_store(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text("{not json", encoding="utf-8")
    repo = JsonProfileRepository(path)

    # Reading degrades to "no profile"; writing refuses to clobber the file
    assert repo.get_profile("default-user") is None
    with pytest.raises(StoreError):
        repo.save_profile("default-user", SAMPLE_PROFILE)
    assert path.read_text(encoding="utf-8") == "{not json"


def test_unwritable_location_raises_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    repo = JsonProfileRepository(blocker / "profiles.json")
    with pytest.raises(StoreError):
        repo.save_profile("default-user", SAMPLE_PROFILE)


def test_invalid_profile_is_rejected(tmp_path):
    repo = JsonProfileRepository(tmp_path / "profiles.json")
    with pytest.raises(ContractValidationError):
        repo.save_profile("default-user", dict(SAMPLE_PROFILE, age=0))
    assert not (tmp_path / "profiles.json").exists()


def test_in_memory_repository():
    repo = InMemoryProfileRepository()
    assert repo.get_profile("x") is None
    repo.save_profile("x", SAMPLE_PROFILE)
    assert repo.get_profile("x").to_dict() == SAMPLE_PROFILE
    repo.save_profile("x", {"age": 40, "gender": "Male", "activityLevel": "Sedentary"})
    assert repo.get_profile("x").location is None
