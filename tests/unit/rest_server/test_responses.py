"""Unit tests for rest_server.responses module."""

from lxml import etree

from src.rest_model.representations import Xwiki
from src.rest_model.xml_codec import NAMESPACE
from src.rest_server.responses import XmlResponse, error_response, representation_response
from src.rest_server.routes import router

NS = {"x": NAMESPACE}


class TestResponses:
    """Test cases for XML responses."""

    def test_representation_response_is_xml(self):
        """Representations are sent as application/xml."""
        response = representation_response(Xwiki(version="1.0"))
        assert response.media_type == "application/xml"
        assert response.status_code == 200
        assert etree.fromstring(response.body).findtext("x:version", namespaces=NS) == "1.0"

    def test_error_response_body(self):
        """Errors carry their status and message in an <error> document."""
        response = error_response(404, "Wiki 'nope' not found")
        root = etree.fromstring(response.body)
        assert response.status_code == 404
        assert root.tag == f"{{{NAMESPACE}}}error"
        assert root.findtext("x:status", namespaces=NS) == "404"
        assert root.findtext("x:message", namespaces=NS) == "Wiki 'nope' not found"

    def test_router_defaults_to_xml_responses(self):
        """The wiki router answers with XmlResponse unless a route says otherwise."""
        assert router.default_response_class is XmlResponse
        assert any(route.path == "/wikis/{wiki}/search" for route in router.routes)
