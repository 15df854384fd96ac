import yaml
import pytest
from composegen.PARSERS.compose_parser import ComposeParser
from composegen.exceptions import ComposeFileNotFoundError, MalformedComposeError

def test_parse(tmp_path):
    compose_content = {
        'version': '3.8',
        'services': {
            'web': {
                'image': 'nginx:latest',
                'ports': ['80:80'],
                'environment': {
                    'DEBUG': 'true'
                },
                'restart': 'always'
            },
            'db': {
                'image': 'postgres:13',
                'volumes': ['db_data:/var/lib/postgresql/data']
            }
        },
        'volumes': {
            'db_data': {}
        }
    }
    
    compose_file = tmp_path / "docker-compose.yml"
    with open(compose_file, 'w') as f:
        yaml.dump(compose_content, f)
        
    parser = ComposeParser()
    document = parser.parse(str(compose_file))
    
    assert 'web' in document.services
    assert 'db' in document.services
    assert document.version == '3.8'
    assert document.services['web'].image == 'nginx:latest'
    assert document.services['web'].ports == ['80:80']
    assert document.services['web'].environment['DEBUG'] == 'true'
    assert document.services['web'].restart == 'always'
    
    assert document.volumes == {'db_data': None}
    assert document.services['db'].volumes == ['db_data:/var/lib/postgresql/data']

def test_parse_alternate_syntax():
    content = """
version: 3.8
services:
  db:
    image: postgres
  web:
    image: app
    build: .
    ports:
      - 8080
      - target: 80
        published: 8000
    environment:
      - MODE=dev
      - EMPTY
    volumes:
      - source: web_data
        target: /data
        read_only: true
    depends_on:
      db:
        condition: service_started
    command: ["python", "app.py"]
    restart: no
"""
    document = ComposeParser().parse_from_string(content)
    web = document.services['web']

    assert document.version == '3.8'
    assert web.ports == ['8080', '8000:80']
    assert web.environment == {'MODE': 'dev', 'EMPTY': ''}
    assert web.volumes == ['web_data:/data:ro']
    assert web.depends_on == ['db']
    assert web.command == 'python app.py'
    assert web.restart == 'no'

def test_parse_empty_content():
    document = ComposeParser(default_version="3.9").parse_from_string("")
    assert document.version == "3.9"
    assert document.services == {}

def test_parse_missing_file(tmp_path):
    with pytest.raises(ComposeFileNotFoundError):
        ComposeParser().parse(str(tmp_path / "missing.yml"))

@pytest.mark.parametrize("content", [
    "services: [unclosed",
    "- just\n- a list\n",
    "services:\n  - web\n",
    "services:\n  web:\n    ports: ['80:80']\n",
    "services:\n  web:\n    image: nginx\n    depends_on: [db]\n",
])
def test_parse_malformed(content):
    with pytest.raises(MalformedComposeError):
        ComposeParser().parse_from_string(content)

def test_parse_build_only_service_has_no_image():
    content = "services:\n  app:\n    build: .\n"
    with pytest.raises(MalformedComposeError) as excinfo:
        ComposeParser().parse_from_string(content)
    assert excinfo.value.reason == "service 'app' has no image"
