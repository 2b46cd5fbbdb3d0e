import pytest

from builders import NOW, block, employee


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def population():
    return [
        employee(
            block(hq_id="1", tehsil_id="11", designation_id="d1", unit_id="u1",
                  posting_category_id="c1", posting_place_title="Civil Court Lahore",
                  bps="BPS-17", status="In-Service", is_currently_working=True,
                  leaves=[{"type": "Medical Leave", "start_date": "2024-06-10", "end_date": "2024-06-20"}]),
            id="e1", full_name="Ali Raza", father_name="Muhammad Raza", cnic="36302-1234567-1",
            gender="Male", domicile="Lahore", sect="Muslim", dob="1980-05-01",
            date_of_appointment="2005-03-01", status="Active",
        ),
        employee(
            block(hq_id="2", tehsil_id="21", designation_id="d2", unit_id="u2",
                  posting_category_id="c2", posting_place_title="Sessions Court Multan",
                  bps="BPS-11", status="Suspended", status_date="2023-02-01",
                  disciplinary_actions=[{"action_date": "2023-01-15", "decision": "Suspended"}]),
            id="e2", full_name="Sara Khan", father_name="Imran Khan", cnic="35202-7654321-2",
            gender="Female", domicile="Multan", sect="Christian", dob="1990-11-20",
            date_of_appointment="2015-07-01", status="Suspended",
        ),
        employee(
            id="e3", full_name="Bilal Ahmed", father_name="Ahmed Ali", cnic="",
            gender="male", domicile="Lahore", status="",
        ),
    ]
