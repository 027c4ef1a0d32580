"""Image upload handling and orphaned-file cleanup."""

from pathlib import Path

from sqlalchemy import delete

from src.core.configs import settings
from src.core.db import SessionLocal
from src.models.schema.animal import Animal as AnimalModel
from src.services.animals import assets, records
from tests.conftest import ANIMAL_FORM, PNG_BYTES


def _stored_path(image_url: str) -> Path:
    return Path(settings.upload_dir) / Path(image_url).name


class TestUploads:
    def test_create_with_image_stores_file(self, client, create_animal, png_upload):
        animal = create_animal(files=png_upload())

        assert animal["image"].startswith(f"{settings.upload_url_prefix}/animal-")
        assert animal["image"].endswith(".png")
        assert _stored_path(animal["image"]).read_bytes() == PNG_BYTES

    def test_stored_image_is_served(self, client, create_animal, png_upload):
        animal = create_animal(files=png_upload())

        res = client.get(animal["image"])
        assert res.status_code == 200
        assert res.content == PNG_BYTES

    def test_non_image_is_rejected(self, client, auth_headers, upload_dir):
        res = client.post(
            "/animals",
            data=ANIMAL_FORM,
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers,
        )
        assert res.status_code == 400
        assert res.json() == {"error": "Only image files are allowed"}
        assert list(upload_dir.iterdir()) == []

    def test_image_extension_with_wrong_mime_is_rejected(self, client, auth_headers):
        res = client.post(
            "/animals",
            data=ANIMAL_FORM,
            files={"image": ("photo.png", b"hello", "application/octet-stream")},
            headers=auth_headers,
        )
        assert res.status_code == 400

    def test_oversized_image_is_rejected(self, client, auth_headers, upload_dir, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size_bytes", 16)

        res = client.post(
            "/animals",
            data=ANIMAL_FORM,
            files={"image": ("big.png", PNG_BYTES, "image/png")},
            headers=auth_headers,
        )
        assert res.status_code == 400
        assert "exceeds" in res.json()["error"]
        assert list(upload_dir.iterdir()) == []

    def test_conflicting_create_removes_new_upload(
        self, client, other_headers, create_animal, png_upload, upload_dir
    ):
        first = create_animal(files=png_upload())

        res = client.post(
            "/animals", data=ANIMAL_FORM, files=png_upload("dup.png"), headers=other_headers
        )
        assert res.status_code == 400
        assert [p.name for p in upload_dir.iterdir()] == [Path(first["image"]).name]


class TestLifecycle:
    def test_replacing_image_deletes_previous_file(
        self, client, auth_headers, create_animal, png_upload
    ):
        animal = create_animal(files=png_upload())
        old_path = _stored_path(animal["image"])

        res = client.put(
            f"/animals/{animal['id']}", files=png_upload("new.gif"), headers=auth_headers
        )
        # gif extension with image/png content type still matches the allow-list
        assert res.status_code == 200
        updated = res.json()

        assert updated["image"] != animal["image"]
        assert not old_path.exists()
        assert _stored_path(updated["image"]).exists()

    def test_update_without_image_keeps_file(
        self, client, auth_headers, create_animal, png_upload
    ):
        animal = create_animal(files=png_upload())

        res = client.put(
            f"/animals/{animal['id']}", data={"status": "sold"}, headers=auth_headers
        )
        assert res.json()["image"] == animal["image"]
        assert _stored_path(animal["image"]).exists()

    def test_update_succeeds_when_old_file_already_gone(
        self, client, auth_headers, create_animal, png_upload
    ):
        animal = create_animal(files=png_upload())
        _stored_path(animal["image"]).unlink()

        res = client.put(
            f"/animals/{animal['id']}", files=png_upload(), headers=auth_headers
        )
        assert res.status_code == 200
        assert _stored_path(res.json()["image"]).exists()

    def test_update_succeeds_when_old_file_cannot_be_removed(
        self, client, auth_headers, create_animal, png_upload, monkeypatch
    ):
        animal = create_animal(files=png_upload())
        old_name = Path(animal["image"]).name
        real_unlink = Path.unlink

        def locked_unlink(self, *args, **kwargs):
            if self.name == old_name:
                raise PermissionError("locked")
            return real_unlink(self, *args, **kwargs)

        monkeypatch.setattr(Path, "unlink", locked_unlink)

        res = client.put(
            f"/animals/{animal['id']}", files=png_upload(), headers=auth_headers
        )
        assert res.status_code == 200
        assert res.json()["image"] != animal["image"]

    def test_conflicting_update_keeps_old_image(
        self, client, auth_headers, create_animal, png_upload, upload_dir
    ):
        create_animal(number="A1")
        second = create_animal(number="A2", files=png_upload())

        res = client.put(
            f"/animals/{second['id']}",
            data={"number": "A1"},
            files=png_upload(),
            headers=auth_headers,
        )
        assert res.status_code == 400
        assert [p.name for p in upload_dir.iterdir()] == [Path(second["image"]).name]

    def test_update_of_record_deleted_midway_is_not_found(
        self, client, auth_headers, create_animal, png_upload, upload_dir, monkeypatch
    ):
        animal = create_animal()
        real_save = records.save_image

        def save_then_delete_row(image):
            url = real_save(image)
            with SessionLocal() as other:
                other.execute(delete(AnimalModel).where(AnimalModel.id == animal["id"]))
                other.commit()
            return url

        monkeypatch.setattr(records, "save_image", save_then_delete_row)

        res = client.put(
            f"/animals/{animal['id']}", files=png_upload(), headers=auth_headers
        )
        assert res.status_code == 404
        assert res.json() == {"error": "Animal not found"}
        assert list(upload_dir.iterdir()) == []

    def test_delete_removes_file(self, client, auth_headers, create_animal, png_upload):
        animal = create_animal(files=png_upload())
        path = _stored_path(animal["image"])

        res = client.delete(f"/animals/{animal['id']}", headers=auth_headers)
        assert res.status_code == 200
        assert not path.exists()

    def test_delete_with_missing_file_succeeds(
        self, client, auth_headers, create_animal, png_upload
    ):
        animal = create_animal(files=png_upload())
        _stored_path(animal["image"]).unlink()

        res = client.delete(f"/animals/{animal['id']}", headers=auth_headers)
        assert res.status_code == 200


class TestHelpers:
    def test_generated_names_are_unique(self):
        names = {assets.generate_filename("Cow.JPG") for _ in range(50)}
        assert len(names) == 50
        assert all(n.startswith("animal-") and n.endswith(".jpg") for n in names)

    def test_delete_image_ignores_empty_reference(self):
        assert assets.delete_image(None) is False
        assert assets.delete_image("") is False

    def test_resolve_image_path_stays_in_upload_dir(self):
        path = assets.resolve_image_path("/uploads/../../etc/passwd")
        assert path == Path(settings.upload_dir) / "passwd"
