import io

import pytest
from werkzeug.datastructures import FileStorage, MultiDict

from acs_dashboard.config.settings import TestingConfig
from acs_dashboard.core.forms import (ChangePasswordForm, ClientForm, InvoiceRequestForm, SubprojectForm,
                                      UserForm, ValidationError, first_error, parse_form, validate_file,
                                      normalize_client_id, validate_upload)

CLIENT = {
    'name': 'Reliance Retail',
    'type': 'Enterprise',
    'contactPerson': 'Asha Rao',
    'email': 'asha@example.com',
    'phone': '9876543210',
    'address': 'Mumbai',
}

LIMITS = {'MAX_UPLOAD_SIZE': TestingConfig.MAX_UPLOAD_SIZE,
          'ALLOWED_UPLOAD_EXTENSIONS': TestingConfig.ALLOWED_UPLOAD_EXTENSIONS}


def test_client_payload_uses_camel_case_and_drops_blanks():
    form = parse_form(ClientForm, MultiDict(dict(CLIENT, gstNumber='', contractStartDate='2024-01-01')))
    payload = form.to_payload()
    assert payload['contactPerson'] == 'Asha Rao'
    assert payload['contractStartDate'] == '2024-01-01'
    assert 'gstNumber' not in payload


def test_missing_field_message():
    with pytest.raises(ValidationError) as exc:
        parse_form(ClientForm, MultiDict(dict(CLIENT, contactPerson='')))
    assert first_error(exc.value) == 'Contact person is required'


def test_contract_dates_must_be_ordered():
    data = dict(CLIENT, contractStartDate='2024-06-01', contractEndDate='2024-01-01')
    with pytest.raises(ValidationError) as exc:
        parse_form(ClientForm, MultiDict(data))
    assert first_error(exc.value) == 'Contract end date cannot be before the start date'


def test_password_confirmation():
    data = MultiDict({'oldPassword': 'old-secret', 'newPassword': 'new-secret', 'confirm': 'other-secret'})
    with pytest.raises(ValidationError) as exc:
        parse_form(ChangePasswordForm, data)
    assert first_error(exc.value) == 'Passwords do not match'


def test_unchecked_checkboxes_are_false():
    form = parse_form(UserForm, MultiDict({
        'name': 'Ravi Kumar', 'email': 'ravi@example.com', 'role': 'ADMIN', 'department': 'Operations',
        'sendInvite': 'on',
    }))
    assert form.send_invite is True
    assert form.require_password_reset is False


def test_subproject_configuration_payload():
    form = parse_form(SubprojectForm, MultiDict({
        'name': 'Phase 1', 'baseMonthlyRent': '1500', 'tenureMonths': '36',
        'installationChargeable': 'on', 'installationCharge': '2500', 'maintenanceIncluded': 'on',
    }))
    payload = form.to_payload()
    assert payload['configuration'] == {
        'baseMonthlyRent': 1500,
        'tenureMonths': 36,
        'installationChargeable': True,
        'installationCharge': 2500.0,
        'maintenanceIncluded': True,
    }


def test_subproject_requires_charge_when_chargeable():
    with pytest.raises(ValidationError) as exc:
        parse_form(SubprojectForm, MultiDict({
            'name': 'Phase 1', 'baseMonthlyRent': '1500', 'tenureMonths': '36',
            'installationChargeable': 'on', 'maintenanceIncluded': 'on',
        }))
    assert first_error(exc.value) == 'Installation charge is required when installation is chargeable'


def test_invoice_request_collects_lists():
    data = MultiDict([
        ('clientId', '3'), ('projectId', '7'), ('subprojectIds', '11'), ('subprojectIds', '12'),
        ('billingMonth', '2024-09'), ('categories', 'installation'), ('categories', 'maintenance'),
    ])
    form = parse_form(InvoiceRequestForm, data)
    assert form.subproject_ids == ['11', '12']
    assert form.to_payload()['categories'] == ['installation', 'maintenance']


def test_invoice_request_rejects_bad_month():
    data = MultiDict([('clientId', '3'), ('projectId', '7'), ('subprojectIds', '11'),
                      ('billingMonth', '2024-13'), ('categories', 'installation')])
    with pytest.raises(ValidationError):
        parse_form(InvoiceRequestForm, data)


@pytest.mark.parametrize('raw, expected', [
    ('CLT-007', '7'),
    ('clt-12', '12'),
    (' 42 ', '42'),
    (5, '5'),
    ('ACME', 'ACME'),
])
def test_normalize_client_id(raw, expected):
    assert normalize_client_id(raw) == expected


def test_validate_upload():
    assert validate_upload(None, 0, 100, ('csv',)) == 'Please select a file to upload'
    assert validate_upload('sites.csv', 101, 100, ('csv',)) == 'File size exceeds 0 MB limit'
    assert validate_upload('sites.pdf', 10, 100, ('csv', 'xlsx')) == 'Only .csv, .xlsx files are accepted'
    assert validate_upload('SITES.CSV', 10, 100, ('csv',)) is None


def test_validate_file_measures_the_stream():
    upload = FileStorage(stream=io.BytesIO(b'x' * (TestingConfig.MAX_UPLOAD_SIZE + 1)), filename='big.csv')
    assert validate_file(upload, LIMITS) == 'File size exceeds 10 MB limit'

    upload = FileStorage(stream=io.BytesIO(b'a,b\n1,2\n'), filename='ok.csv')
    assert validate_file(upload, LIMITS) is None
    assert upload.stream.tell() == 0
