"""Bundled records used when no spreadsheet endpoint is configured or it fails."""

MOCK_INTERNS = [
    {
        'name': 'Asha Menon',
        'internId': 'CIAL-101',
        'email': 'cial-101@cial.org',
        'status': 'Active',
        'joiningDate': '2024-05-01',
    },
    {
        'name': 'Rahul Nair',
        'internId': 'CIAL-102',
        'email': 'cial-102@cial.org',
        'status': 'Active',
        'joiningDate': '2024-05-01',
    },
]

INITIAL_ACTIVITIES = [
    {
        'internId': 'CIAL-101',
        'date': '2024-05-02',
        'hours': 3,
        'category': 'Learning',
        'description': 'Completed the onboarding modules on cloud fundamentals and '
                       'set up the local development environment for the portal.',
        'qualityScore': 7,
        'proofLink': '',
    },
    {
        'internId': 'CIAL-101',
        'date': '2024-05-03',
        'hours': 2,
        'category': 'Development',
        'description': 'Implemented the first draft of the attendance export and '
                       'reviewed the pull request feedback with the mentor.',
        'qualityScore': 6,
        'proofLink': '',
    },
    {
        'internId': 'CIAL-102',
        'date': '2024-05-02',
        'hours': 3,
        'category': 'Research',
        'description': 'Surveyed spreadsheet automation options and summarised the '
                       'trade-offs between Apps Script and a hosted backend.',
        'qualityScore': 8,
        'proofLink': '',
    },
]
