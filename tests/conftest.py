import pytest

WSDL_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<wsdl:definitions name="Invoicing"
    targetNamespace="http://example.com/services/invoicing"
    xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
    xmlns:xs="http://www.w3.org/2001/XMLSchema"
    xmlns:soap="http://schemas.xmlsoap.org/wsdl/soap/"
    xmlns:soap12="http://schemas.xmlsoap.org/wsdl/soap12/"
    xmlns:wsaw="http://www.w3.org/2006/05/addressing/wsdl"
    xmlns:tns="http://example.com/services/invoicing">
  <wsdl:types>
    <xs:schema targetNamespace="http://example.com/services/invoicing">
      {schema}
    </xs:schema>
  </wsdl:types>
  {body}
</wsdl:definitions>
"""

SCHEMA = """
      <xs:complexType name="A"><xs:sequence>
        <xs:element name="Id" type="q1:Guid" xmlns:q1="http://schemas.microsoft.com/2003/10/Serialization/"/>
      </xs:sequence></xs:complexType>
      <xs:element name="A" type="tns:A"/>
      <xs:import namespace="B"/>
"""

BODY = """
  <wsdl:message name="Zeta"><wsdl:part name="parameters" element="tns:Zeta"/></wsdl:message>
  <wsdl:message name="Alpha"><wsdl:part name="parameters" element="tns:Alpha"/></wsdl:message>
  <wsdl:portType name="IInvoicing">
    <wsdl:operation name="Submit">
      <wsdl:input wsaw:Action="http://example.com/svc/2023/Q2/Submit" message="tns:Zeta"/>
    </wsdl:operation>
    <wsdl:operation name="Cancel">
      <wsdl:input wsaw:Action="http://example.com/svc/Cancel" message="tns:Alpha"/>
    </wsdl:operation>
  </wsdl:portType>
  <wsdl:binding name="CustomBinding_Invoicing" type="tns:IInvoicing">
    <wsdl:operation name="Submit">
      <soap12:operation soapAction="http://example.com/svc/2024/Q1/Submit" style="document"/>
    </wsdl:operation>
    <wsdl:operation name="Cancel">
      <soap:operation soapAction="http://example.com/svc/Cancel" style="document"/>
    </wsdl:operation>
  </wsdl:binding>
"""


@pytest.fixture
def write_wsdl(tmp_path):
    """Write a WSDL built from schema and body snippets and return its path."""

    def write(schema=SCHEMA, body=BODY, name="service.wsdl"):
        path = tmp_path / name
        path.write_text(WSDL_TEMPLATE.format(schema=schema, body=body), encoding="utf-8")
        return str(path)

    return write
