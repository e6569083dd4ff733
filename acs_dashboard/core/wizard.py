"""
Import wizard view-model

The upload dialogs run in two steps: pick a file and upload it, then review
the per-row results the backend returns for the upload session. The review
step keeps a local editable copy of every row. The whole state is plain data
so it can be kept in the per-session store between requests.
"""

TABS = ('all', 'success', 'warnings', 'errors')

TAB_STATUSES = {
    'success': ('OK',),
    'warnings': ('WARN', 'WARNING'),
    'errors': ('ERROR',),
}

EMPTY_RESULT = {'processed': 0, 'saved': 0, 'updated': 0, 'warnings': 0, 'errors': 0}


class ImportWizard:
    """State of one import dialog"""

    def __init__(self, kind, file_type=None):
        self.kind = kind
        self.file_type = file_type
        self.reset()

    def reset(self):
        self.step = 'upload'
        self.session_id = None
        self.filename = None
        self.result = dict(EMPTY_RESULT)
        self.rows = []
        self.active_tab = 'all'

    # Persistence

    @property
    def session_key(self):
        return f'wizard:{self.kind}'

    def to_dict(self):
        return {
            'kind': self.kind,
            'file_type': self.file_type,
            'step': self.step,
            'session_id': self.session_id,
            'filename': self.filename,
            'result': self.result,
            'rows': self.rows,
            'active_tab': self.active_tab,
        }

    @classmethod
    def from_dict(cls, data):
        wizard = cls(data['kind'], data.get('file_type'))
        wizard.step = data.get('step', 'upload')
        wizard.session_id = data.get('session_id')
        wizard.filename = data.get('filename')
        wizard.result = data.get('result') or dict(EMPTY_RESULT)
        wizard.rows = data.get('rows') or []
        wizard.active_tab = data.get('active_tab', 'all')
        return wizard

    @classmethod
    def load(cls, store, kind, file_type=None):
        data = store.get(f'wizard:{kind}')
        if data:
            return cls.from_dict(data)
        return cls(kind, file_type)

    def save(self, store):
        store[self.session_key] = self.to_dict()

    def discard(self, store):
        store.pop(self.session_key, None)

    # Transitions

    def load_response(self, payload, filename=None):
        """Enter the summary step from an upload response"""
        upload_result = payload.get('uploadResult') or {}
        self.session_id = payload.get('sessionId')
        self.filename = filename
        self.result = {key: upload_result.get(key, 0) or 0 for key in EMPTY_RESULT}
        self.rows = [
            dict(row, isEditing=False, editedData=dict(row.get('rowData') or {}))
            for row in upload_result.get('rowResults') or []
        ]
        self.active_tab = 'all'
        self.step = 'summary'

    def _row(self, row_number):
        for row in self.rows:
            if row.get('rowNumber') == row_number:
                return row
        raise KeyError(f'Row {row_number} is not part of this import')

    def toggle_edit(self, row_number):
        row = self._row(row_number)
        row['isEditing'] = not row['isEditing']

    def update_field(self, row_number, key, value):
        self._row(row_number)['editedData'][key] = value

    def remove_row(self, row_number):
        self._row(row_number)
        self.rows = [row for row in self.rows if row.get('rowNumber') != row_number]

    def select_tab(self, tab):
        self.active_tab = tab if tab in TABS else 'all'

    # Views

    def filtered_rows(self, tab=None):
        tab = tab or self.active_tab
        statuses = TAB_STATUSES.get(tab)
        if statuses is None:
            return list(self.rows)
        return [row for row in self.rows if row.get('status') in statuses]

    def counts(self):
        return {tab: len(self.filtered_rows(tab)) for tab in TABS}

    def failed_rows(self):
        return [row for row in self.rows if row.get('status') != 'OK']

    def corrections(self):
        """Body of a correction request: row number -> edited values"""
        return {str(row['rowNumber']): dict(row['editedData']) for row in self.failed_rows()}

    def summary_message(self):
        if self.result.get('errors', 0) > 0:
            return 'warning', f"Import completed with {self.result['errors']} error(s). Review below."
        return 'success', (f"Import successful! {self.result.get('saved', 0)} created, "
                           f"{self.result.get('updated', 0)} updated.")
