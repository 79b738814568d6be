# Namespace URIs bound to the fixed prefixes used by every query.
WSDL_NS = "http://schemas.xmlsoap.org/wsdl/"
XSD_NS = "http://www.w3.org/2001/XMLSchema"
SOAP_NS = "http://schemas.xmlsoap.org/wsdl/soap/"
SOAP12_NS = "http://schemas.xmlsoap.org/wsdl/soap12/"

NSMAP = {
    "wsdl": WSDL_NS,
    "xs": XSD_NS,
    "soap": SOAP_NS,
    "soap12": SOAP12_NS,
}
