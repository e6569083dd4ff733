"""
Form schemas

Submitted forms are validated here before anything is sent to the backend.
Field aliases are the camelCase names the backend expects, so the same
names are used in the HTML forms and in the request payloads.
"""
from datetime import date
from typing import List, Literal, Optional, get_origin

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

TRUTHY = ('on', 'true', '1', 'yes')


def normalize_client_id(client_id):
    """'CLT-007' -> '7'; numeric ids pass through"""
    text = str(client_id).strip()
    if text.upper().startswith('CLT-'):
        text = text[4:]
    return str(int(text)) if text.isdigit() else text


class FormModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_payload(self):
        return self.model_dump(by_alias=True, mode='json', exclude_none=True)


class LoginForm(FormModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePasswordForm(FormModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)
    confirm: str

    @model_validator(mode='after')
    def passwords_match(self):
        if self.new_password != self.confirm:
            raise ValueError('Passwords do not match')
        return self

    def to_payload(self):
        return {'oldPassword': self.old_password, 'newPassword': self.new_password}


class ClientForm(FormModel):
    name: str = Field(min_length=2, max_length=100)
    type: Literal['Enterprise', 'Mid-Market', 'SMB'] = 'Enterprise'
    contact_person: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=10, max_length=15)
    address: str = Field(min_length=2, max_length=200)
    gst_number: Optional[str] = Field(default=None, max_length=15)
    trade_name: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=500)
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None

    @model_validator(mode='after')
    def contract_dates_ordered(self):
        if self.contract_start_date and self.contract_end_date \
                and self.contract_end_date < self.contract_start_date:
            raise ValueError('Contract end date cannot be before the start date')
        return self


class ProjectForm(FormModel):
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    client_id: int
    status: Literal['active', 'on-hold'] = 'active'


class SubprojectForm(FormModel):
    """Subproject with its pricing configuration, locked once created"""

    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    base_monthly_rent: int = Field(ge=1000, le=100000)
    tenure_months: int = Field(ge=12, le=120)
    installation_chargeable: bool = False
    installation_charge: Optional[float] = Field(default=None, ge=0)
    maintenance_included: bool = True
    maintenance_charge: Optional[float] = Field(default=None, ge=0)
    planned_acs_count: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode='after')
    def charges_present(self):
        if self.installation_chargeable and self.installation_charge is None:
            raise ValueError('Installation charge is required when installation is chargeable')
        if not self.maintenance_included and self.maintenance_charge is None:
            raise ValueError('Maintenance charge is required when maintenance is not included')
        return self

    def to_payload(self):
        configuration = {
            'baseMonthlyRent': self.base_monthly_rent,
            'tenureMonths': self.tenure_months,
            'installationChargeable': self.installation_chargeable,
            'maintenanceIncluded': self.maintenance_included,
        }
        if self.installation_chargeable:
            configuration['installationCharge'] = self.installation_charge
        if not self.maintenance_included:
            configuration['maintenanceCharge'] = self.maintenance_charge
        if self.notes:
            configuration['notes'] = self.notes

        payload = {'name': self.name, 'configuration': configuration}
        if self.description:
            payload['description'] = self.description
        if self.planned_acs_count is not None:
            payload['plannedAcsCount'] = self.planned_acs_count
        return payload


class SiteForm(FormModel):
    name: str = Field(min_length=2, max_length=100)
    location: str = Field(min_length=5, max_length=200)
    acs_planned: int = Field(ge=1, le=100)
    site_code: Optional[str] = Field(default=None, max_length=50)


class TicketForm(FormModel):
    title: str = Field(min_length=5)
    description: str = Field(min_length=10)
    site_id: str = Field(min_length=1)
    priority: Literal['Low', 'Medium', 'High', 'Critical']
    unit_id: Optional[str] = None
    assignee_id: Optional[str] = None


class UserForm(FormModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    role: str = Field(min_length=1)
    department: str = Field(min_length=2, max_length=50)
    send_invite: bool = True
    require_password_reset: bool = True


class UserUpdateForm(FormModel):
    name: str = Field(min_length=2)
    email: EmailStr
    role: str = Field(min_length=1)


class InvoiceRequestForm(FormModel):
    client_id: str = Field(min_length=1)
    project_id: str = Field(min_length=1)
    subproject_ids: List[str] = Field(min_length=1)
    billing_month: str = Field(pattern=r'^\d{4}-(0[1-9]|1[0-2])$')
    categories: List[Literal['installation', 'extra_materials', 'maintenance']] = Field(min_length=1)
    state: Optional[str] = None

    @field_validator('client_id')
    @classmethod
    def numeric_client_id(cls, value):
        return normalize_client_id(value)


def parse_form(model, form):
    """Validate a submitted form (a werkzeug MultiDict) against a schema

    Checkboxes absent from the submission are False, empty inputs are
    treated as missing and list fields collect every submitted value.
    """
    data = {}
    for name, field in model.model_fields.items():
        key = field.alias or name
        if field.annotation is bool:
            data[key] = str(form.get(key, '')).lower() in TRUTHY
        elif get_origin(field.annotation) in (list, List):
            data[key] = [value for value in form.getlist(key) if value != '']
        else:
            value = form.get(key)
            if value is not None and value != '':
                data[key] = value
    return model.model_validate(data)


def first_error(exc):
    """Human readable text for the first validation error"""
    error = exc.errors()[0]
    message = error['msg']
    if message.startswith('Value error, '):
        message = message[len('Value error, '):]
    loc = [str(part) for part in error.get('loc', ()) if not isinstance(part, int)]
    if not loc:
        return message
    label = ''.join(' ' + c.lower() if c.isupper() else c for c in loc[0]).capitalize()
    if error['type'] == 'missing':
        return f'{label} is required'
    return f'{label}: {message}'


def validate_upload(filename, size, max_size, allowed_extensions):
    """Error message for an unacceptable import file, None when it is fine"""
    if not filename:
        return 'Please select a file to upload'
    if size > max_size:
        return f'File size exceeds {max_size // (1024 * 1024)} MB limit'
    extension = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    if extension not in allowed_extensions:
        return 'Only ' + ', '.join(f'.{ext}' for ext in allowed_extensions) + ' files are accepted'
    return None


def validate_file(upload, config):
    """validate_upload for a werkzeug FileStorage using the app limits"""
    if upload is None or not upload.filename:
        return validate_upload(None, 0, config['MAX_UPLOAD_SIZE'], config['ALLOWED_UPLOAD_EXTENSIONS'])
    upload.stream.seek(0, 2)
    size = upload.stream.tell()
    upload.stream.seek(0)
    return validate_upload(upload.filename, size, config['MAX_UPLOAD_SIZE'],
                           config['ALLOWED_UPLOAD_EXTENSIONS'])


__all__ = [
    'ChangePasswordForm',
    'ClientForm',
    'InvoiceRequestForm',
    'LoginForm',
    'ProjectForm',
    'SiteForm',
    'SubprojectForm',
    'TicketForm',
    'UserForm',
    'UserUpdateForm',
    'ValidationError',
    'first_error',
    'parse_form',
    'validate_file',
    'validate_upload',
]
