from pathlib import Path

import pytest

from petcare import config
from petcare.models import Notification

from .conftest import GIF_BYTES, JPEG_BYTES, PNG_BYTES


def stored_photos():
    return {p.name for p in Path(config.UPLOAD_DIR).glob("*")}


def test_create_advertisement_defaults(create_ad):
    ad = create_ad()

    assert ad["status"] == "Pending"
    assert ad["paymentStatus"] == "Pending"
    assert ad["petType"] == ""
    assert ad["photo"] is None
    assert ad["id"]


def test_create_sell_a_pet_keeps_pet_type(create_ad):
    ad = create_ad(advertisementType="Sell a Pet", petType="Dog")
    assert ad["petType"] == "Dog"


def test_non_sale_types_discard_pet_type(create_ad):
    ad = create_ad(advertisementType="Found Pet", petType="Cat")
    assert ad["petType"] == ""


def test_email_stored_lowercase(create_ad):
    ad = create_ad(email="  Jane@Example.COM ")
    assert ad["email"] == "jane@example.com"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"heading": "   "}, "Please fill all required fields"),
        ({"contactNumber": ""}, "Please fill all required fields"),
        ({"advertisementType": "Adopt a Pet"}, "Invalid advertisement type"),
        ({"advertisementType": "Sell a Pet"}, "Pet type is required for selling a pet"),
        ({"advertisementType": "Sell a Pet", "petType": "Dragon"}, "Invalid pet type"),
    ],
)
def test_create_validation_errors(client, ad_form, overrides, message):
    response = client.post("/advertisements", data={**ad_form, **overrides})

    assert response.status_code == 400
    assert response.json()["detail"] == message
    assert client.get("/advertisements").json()["data"] == []


def test_missing_field_entirely(client, ad_form):
    del ad_form["description"]
    response = client.post("/advertisements", data=ad_form)
    assert response.status_code == 400
    assert response.json()["detail"] == "Please fill all required fields"


def test_create_with_photo(client, create_ad):
    ad = create_ad(photo=("milo.png", PNG_BYTES, "image/png"))

    assert ad["photo"].startswith("photo-")
    assert ad["photo"].endswith(".png")
    assert ad["photoUrl"] == f"/uploads/{ad['photo']}"
    assert (Path(config.UPLOAD_DIR) / ad["photo"]).read_bytes() == PNG_BYTES

    served = client.get(ad["photoUrl"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


def test_oversized_photo_rejected(client, ad_form):
    before = stored_photos()
    big = JPEG_BYTES + b"\x00" * (6 * 1024 * 1024)

    response = client.post(
        "/advertisements", data=ad_form, files={"photo": ("big.jpg", big, "image/jpeg")}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "File too large. Maximum size is 5MB."
    assert client.get("/advertisements").json()["data"] == []
    assert stored_photos() == before


def test_text_file_disguised_as_image_rejected(client, ad_form):
    before = stored_photos()

    response = client.post(
        "/advertisements",
        data=ad_form,
        files={"photo": ("notes.png", b"just some plain text", "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only JPEG, PNG, and GIF images are allowed"
    assert stored_photos() == before


def test_gif_photo_accepted(create_ad):
    ad = create_ad(photo=("milo.gif", GIF_BYTES, "image/gif"))
    assert ad["photo"].endswith(".gif")


def test_double_dot_filename_accepted(create_ad):
    ad = create_ad(photo=("milo..png", PNG_BYTES, "image/png"))
    assert ad["photo"].endswith(".png")
    assert ad["photo"] in stored_photos()


def test_path_in_filename_rejected(client, ad_form):
    before = stored_photos()

    response = client.post(
        "/advertisements",
        data=ad_form,
        files={"photo": ("../../milo.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid filename"
    assert stored_photos() == before


def test_wrong_mime_type_rejected(client, ad_form):
    response = client.post(
        "/advertisements",
        data=ad_form,
        files={"photo": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Only JPEG, PNG, and GIF images are allowed"


def test_invalid_form_with_valid_photo_stores_nothing(client, ad_form):
    before = stored_photos()

    response = client.post(
        "/advertisements",
        data={**ad_form, "advertisementType": "Nope"},
        files={"photo": ("milo.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 400
    assert stored_photos() == before


def test_list_returns_every_advertisement(client, create_ad):
    first = create_ad(heading="First")
    second = create_ad(heading="Second")

    ids = [ad["id"] for ad in client.get("/advertisements").json()["data"]]
    assert set(ids) == {first["id"], second["id"]}


def test_details_and_unknown_id(client, create_ad):
    ad = create_ad()

    assert client.get(f"/advertisements/details/{ad['id']}").json()["heading"] == ad["heading"]
    response = client.get("/advertisements/details/does-not-exist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Advertisement not found"


def test_my_ads_matches_by_email(client, create_ad):
    create_ad(email="jane@example.com")
    create_ad(email="jane@example.com", heading="Second")
    create_ad(email="other@example.com")

    body = client.get("/advertisements/my-ads/jane@example.com").json()
    assert body["count"] == 2
    assert {ad["email"] for ad in body["data"]} == {"jane@example.com"}

    assert client.get("/advertisements/my-ads/jane@example").json()["count"] == 0


def test_my_ads_lookup_ignores_case(client, create_ad):
    ad = create_ad(email="Jane@Example.com")

    body = client.get("/advertisements/my-ads/Jane@Example.com").json()
    assert body["count"] == 1
    assert body["data"][0]["id"] == ad["id"]


def test_approve_changes_only_status(client, create_ad, db_session):
    ad = create_ad()

    response = client.put(f"/advertisements/approve/{ad['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Advertisement approved successfully"

    updated = client.get(f"/advertisements/details/{ad['id']}").json()
    assert updated["status"] == "Approved"
    for field in ("name", "email", "heading", "description", "paymentStatus", "petType"):
        assert updated[field] == ad[field]

    notification = db_session.query(Notification).filter_by(recipient=ad["email"]).one()
    assert notification.title == "Advertisement Approved"
    assert notification.data["advertisementId"] == ad["id"]


def test_reject_and_unknown_id(client, create_ad):
    ad = create_ad()

    assert client.put(f"/advertisements/reject/{ad['id']}").status_code == 200
    assert client.get(f"/advertisements/details/{ad['id']}").json()["status"] == "Rejected"
    assert client.put("/advertisements/reject/missing").status_code == 404
    assert client.put("/advertisements/approve/missing").status_code == 404


def test_pay_changes_only_payment_status(client, create_ad):
    ad = create_ad()

    response = client.put(f"/advertisements/pay/{ad['id']}")
    assert response.status_code == 200

    updated = client.get(f"/advertisements/details/{ad['id']}").json()
    assert updated["paymentStatus"] == "Paid"
    assert updated["status"] == "Pending"


def test_edit_replaces_fields_and_photo(client, create_ad, ad_form):
    ad = create_ad(photo=("milo.png", PNG_BYTES, "image/png"))
    old_photo = ad["photo"]

    response = client.put(
        f"/advertisements/edit/{ad['id']}",
        data={**ad_form, "heading": "Found him!", "advertisementType": "Found Pet"},
        files={"photo": ("milo.jpg", JPEG_BYTES, "image/jpeg")},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["heading"] == "Found him!"
    assert updated["advertisementType"] == "Found Pet"
    assert updated["photo"] != old_photo
    assert updated["photo"].endswith(".jpg")
    assert old_photo not in stored_photos()


def test_edit_without_photo_keeps_photo(client, create_ad, ad_form):
    ad = create_ad(photo=("milo.png", PNG_BYTES, "image/png"))

    response = client.put(f"/advertisements/edit/{ad['id']}", data=ad_form)

    assert response.status_code == 200
    assert response.json()["photo"] == ad["photo"]


def test_edit_validation_and_not_found(client, create_ad, ad_form):
    ad = create_ad()

    response = client.put(
        f"/advertisements/edit/{ad['id']}", data={**ad_form, "advertisementType": "Sell a Pet"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Pet type is required for selling a pet"
    assert client.get(f"/advertisements/details/{ad['id']}").json()["heading"] == ad["heading"]

    assert client.put("/advertisements/edit/missing", data=ad_form).status_code == 404


def test_echo_edit_keeps_text_unchanged(client, create_ad):
    ad = create_ad(heading="Cats & Dogs <3", description='Friendly "Milo" & his sister')
    assert ad["heading"] == "Cats & Dogs <3"

    fields = ("name", "email", "contactNumber", "advertisementType", "heading", "description")
    for _ in range(2):
        response = client.put(
            f"/advertisements/edit/{ad['id']}", data={field: ad[field] for field in fields}
        )
        assert response.status_code == 200
        ad = response.json()

    assert ad["heading"] == "Cats & Dogs <3"
    assert ad["description"] == 'Friendly "Milo" & his sister'


def test_delete_then_404(client, create_ad):
    ad = create_ad(photo=("milo.png", PNG_BYTES, "image/png"))

    response = client.delete(f"/advertisements/delete/{ad['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Advertisement deleted successfully"

    assert client.get(f"/advertisements/details/{ad['id']}").status_code == 404
    assert client.delete(f"/advertisements/delete/{ad['id']}").status_code == 404
    assert ad["photo"] not in stored_photos()


def test_pricing(client):
    pricing = client.get("/advertisements/pricing").json()["data"]
    assert pricing == {"Sell a Pet": 1000, "Lost Pet": 500, "Found Pet": 500}


def test_security_headers_present(client):
    response = client.get("/advertisements")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_lost_cat_moderation_scenario(client):
    form = {
        "name": "Jane Doe",
        "email": "jane@x.com",
        "contactNumber": "123-456-7890",
        "advertisementType": "Lost Pet",
        "heading": "Lost cat",
        "description": "Orange tabby missing since Monday",
    }
    created = client.post(
        "/advertisements", data=form, files={"photo": ("cat.jpg", JPEG_BYTES, "image/jpeg")}
    )
    assert created.status_code == 201
    ad = created.json()
    assert ad["status"] == "Pending"
    assert ad["paymentStatus"] == "Pending"

    assert client.put(f"/advertisements/approve/{ad['id']}").status_code == 200
    assert client.get(f"/advertisements/details/{ad['id']}").json()["status"] == "Approved"

    mine = client.get("/advertisements/my-ads/jane@x.com").json()
    assert [a["id"] for a in mine["data"]] == [ad["id"]]


def test_moderating_unknown_id_leaves_collection_unchanged(client, create_ad):
    ad = create_ad()
    before = client.get("/advertisements").json()["data"]

    assert client.put("/advertisements/approve/unknown").status_code == 404
    assert client.put("/advertisements/reject/unknown").status_code == 404

    assert client.get("/advertisements").json()["data"] == before
    assert before[0]["id"] == ad["id"]
