"""Tests for input normalization and validation models."""

import pytest
from pydantic import ValidationError

from hilltop.core.dtos.category import CategoryCreate, CategoryUpdate
from hilltop.core.dtos.contact import ContactCreate
from hilltop.core.dtos.resource import ResourceCreate, ResourceUpdate
from hilltop.core.normalizers import blank_to_none, split_tags


def _resource(**overrides):
    data = {
        "title": "Jenkins Pipeline Tutorial",
        "description": "Learn how to create CI/CD pipelines with Jenkins",
        "url": "https://jenkins.io/doc/book/pipeline/",
        "categoryId": 1,
    }
    data.update(overrides)
    return data


def _error_fields(exc_info):
    return {error["loc"][0] for error in exc_info.value.errors()}


class TestNormalizers:

    def test_split_comma_string(self):
        assert split_tags("docker, kubernetes") == ["docker", "kubernetes"]

    def test_split_drops_empty_entries(self):
        assert split_tags(" ci, ,cd ,") == ["ci", "cd"]

    def test_split_none_is_empty(self):
        assert split_tags(None) == []

    def test_list_entries_trimmed_not_dropped(self):
        assert split_tags([" helm ", ""]) == ["helm", ""]

    def test_blank_to_none(self):
        assert blank_to_none("   ") is None
        assert blank_to_none("x") == "x"
        assert blank_to_none(5) == 5


class TestCategoryModels:

    def test_valid_category(self):
        category = CategoryCreate.model_validate(
            {"name": "CI/CD", "description": "Continuous delivery", "icon": "GitBranch"}
        )
        assert category.model_dump() == {
            "name": "CI/CD",
            "description": "Continuous delivery",
            "icon": "GitBranch",
        }

    def test_values_are_trimmed(self):
        category = CategoryCreate(name="  Kubernetes ", description="d", icon="Container")
        assert category.name == "Kubernetes"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            CategoryCreate(name="   ", description="d", icon="i")
        assert _error_fields(exc_info) == {"name"}

    def test_missing_fields_reported_per_field(self):
        with pytest.raises(ValidationError) as exc_info:
            CategoryCreate.model_validate({"name": "Valid Name"})
        assert _error_fields(exc_info) == {"description", "icon"}

    def test_partial_update_keeps_only_sent_fields(self):
        update = CategoryUpdate.model_validate({"icon": "Zap"})
        assert update.model_dump(exclude_unset=True) == {"icon": "Zap"}

    def test_partial_update_rejects_null(self):
        with pytest.raises(ValidationError):
            CategoryUpdate.model_validate({"name": None})

    def test_partial_update_still_checks_present_fields(self):
        with pytest.raises(ValidationError):
            CategoryUpdate.model_validate({"description": ""})


class TestResourceModels:

    def test_valid_resource(self):
        resource = ResourceCreate.model_validate(_resource())
        assert resource.category_id == 1
        assert resource.tags == []
        assert resource.image_url is None

    def test_tag_string_is_split(self):
        resource = ResourceCreate.model_validate(_resource(tags="docker, kubernetes"))
        assert resource.tags == ["docker", "kubernetes"]

    def test_tag_list_is_kept_in_order(self):
        resource = ResourceCreate.model_validate(_resource(tags=["b", "a", "c"]))
        assert resource.tags == ["b", "a", "c"]

    def test_empty_tag_in_list_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ResourceCreate.model_validate(_resource(tags=["ok", "  "]))
        assert _error_fields(exc_info) == {"tags"}

    def test_non_string_tag_rejected(self):
        with pytest.raises(ValidationError):
            ResourceCreate.model_validate(_resource(tags=[1, 2]))

    def test_empty_url_treated_as_absent(self):
        resource = ResourceCreate.model_validate(_resource(url="", imageUrl="  "))
        assert resource.url is None
        assert resource.image_url is None

    def test_url_kept_verbatim(self):
        resource = ResourceCreate.model_validate(_resource(url="https://helm.sh"))
        assert resource.url == "https://helm.sh"

    @pytest.mark.parametrize("bad_url", ["not-a-valid-url", "/docs/relative", "https://"])
    def test_invalid_url_rejected(self, bad_url):
        with pytest.raises(ValidationError) as exc_info:
            ResourceCreate.model_validate(_resource(url=bad_url))
        assert _error_fields(exc_info) == {"url"}

    def test_invalid_image_url_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ResourceCreate.model_validate(_resource(imageUrl="picture.png"))
        assert _error_fields(exc_info) == {"imageUrl"}

    def test_category_id_must_be_integer(self):
        with pytest.raises(ValidationError) as exc_info:
            ResourceCreate.model_validate(_resource(categoryId="not-a-number"))
        assert _error_fields(exc_info) == {"categoryId"}

    def test_snake_case_input_accepted(self):
        resource = ResourceCreate.model_validate({
            "title": "t",
            "description": "d",
            "category_id": 3,
            "image_url": "https://img.example.com/a.png",
        })
        assert resource.category_id == 3
        assert resource.image_url == "https://img.example.com/a.png"

    def test_update_accepts_any_subset(self):
        update = ResourceUpdate.model_validate({"title": "X"})
        assert update.model_dump(exclude_unset=True) == {"title": "X"}

    def test_update_rejects_null_title(self):
        with pytest.raises(ValidationError):
            ResourceUpdate.model_validate({"title": None})

    def test_update_allows_clearing_url(self):
        update = ResourceUpdate.model_validate({"url": ""})
        assert update.model_dump(exclude_unset=True) == {"url": None}

    def test_update_tag_string_is_split(self):
        update = ResourceUpdate.model_validate({"tags": "a,b"})
        assert update.tags == ["a", "b"]


class TestContactModels:

    def _contact(self, **overrides):
        data = {
            "name": "John Doe",
            "email": "john.doe@example.com",
            "subject": "Question about DevOps tools",
            "message": "I would like to know more about container orchestration tools.",
        }
        data.update(overrides)
        return data

    def test_valid_contact(self):
        contact = ContactCreate.model_validate(self._contact(contact="+1 555 0100"))
        assert contact.email == "john.doe@example.com"
        assert contact.contact == "+1 555 0100"
        assert contact.address is None

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ContactCreate.model_validate(self._contact(email="not-an-email"))
        assert _error_fields(exc_info) == {"email"}

    def test_blank_optional_text_is_none(self):
        contact = ContactCreate.model_validate(self._contact(address="  "))
        assert contact.address is None

    def test_empty_message_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ContactCreate.model_validate(self._contact(message="", subject=""))
        assert _error_fields(exc_info) == {"message", "subject"}
