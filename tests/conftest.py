"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from __future__ import annotations

import json

import pytest
import requests

from bpmn_pathfinder.graph import NodeKind, ProcessGraph

INVOICE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL"
                  xmlns:camunda="http://camunda.org/schema/1.0/bpmn"
                  id="invoice" targetNamespace="http://bpmn.io/schema/bpmn">
  <bpmn:process id="invoice" name="Invoice Receipt" isExecutable="true">
    <bpmn:startEvent id="StartEvent_1" name="Invoice received">
      <bpmn:outgoing>SequenceFlow_1</bpmn:outgoing>
    </bpmn:startEvent>
    <bpmn:businessRuleTask id="assignApprover" name="Assign Approver Group">
      <bpmn:incoming>SequenceFlow_1</bpmn:incoming>
      <bpmn:outgoing>sequenceFlow_178</bpmn:outgoing>
    </bpmn:businessRuleTask>
    <bpmn:userTask id="approveInvoice" name="Approve Invoice" camunda:assignee="demo">
      <bpmn:incoming>sequenceFlow_178</bpmn:incoming>
      <bpmn:incoming>reviewSuccessful</bpmn:incoming>
      <bpmn:outgoing>sequenceFlow_180</bpmn:outgoing>
    </bpmn:userTask>
    <bpmn:exclusiveGateway id="invoice_approved" name="Invoice approved?">
      <bpmn:incoming>sequenceFlow_180</bpmn:incoming>
      <bpmn:outgoing>invoiceNotApproved</bpmn:outgoing>
      <bpmn:outgoing>invoiceApproved</bpmn:outgoing>
    </bpmn:exclusiveGateway>
    <bpmn:userTask id="reviewInvoice" name="Review Invoice">
      <bpmn:incoming>invoiceNotApproved</bpmn:incoming>
      <bpmn:outgoing>sequenceFlow_183</bpmn:outgoing>
    </bpmn:userTask>
    <bpmn:exclusiveGateway id="reviewSuccessful_gw" name="Review successful?">
      <bpmn:incoming>sequenceFlow_183</bpmn:incoming>
      <bpmn:outgoing>reviewNotSuccessful</bpmn:outgoing>
      <bpmn:outgoing>reviewSuccessful</bpmn:outgoing>
    </bpmn:exclusiveGateway>
    <bpmn:userTask id="prepareBankTransfer" name="Prepare Bank Transfer">
      <bpmn:incoming>invoiceApproved</bpmn:incoming>
      <bpmn:outgoing>SequenceFlow_2</bpmn:outgoing>
    </bpmn:userTask>
    <bpmn:serviceTask id="ServiceTask_1" name="Archive Invoice">
      <bpmn:incoming>SequenceFlow_2</bpmn:incoming>
      <bpmn:outgoing>SequenceFlow_3</bpmn:outgoing>
    </bpmn:serviceTask>
    <bpmn:endEvent id="invoiceProcessed" name="Invoice processed">
      <bpmn:incoming>SequenceFlow_3</bpmn:incoming>
    </bpmn:endEvent>
    <bpmn:endEvent id="invoiceNotProcessed" name="Invoice not processed">
      <bpmn:incoming>reviewNotSuccessful</bpmn:incoming>
    </bpmn:endEvent>
    <bpmn:sequenceFlow id="SequenceFlow_1" sourceRef="StartEvent_1" targetRef="assignApprover" />
    <bpmn:sequenceFlow id="sequenceFlow_178" sourceRef="assignApprover" targetRef="approveInvoice" />
    <bpmn:sequenceFlow id="sequenceFlow_180" sourceRef="approveInvoice" targetRef="invoice_approved" />
    <bpmn:sequenceFlow id="invoiceApproved" sourceRef="invoice_approved" targetRef="prepareBankTransfer" />
    <bpmn:sequenceFlow id="invoiceNotApproved" sourceRef="invoice_approved" targetRef="reviewInvoice" />
    <bpmn:sequenceFlow id="sequenceFlow_183" sourceRef="reviewInvoice" targetRef="reviewSuccessful_gw" />
    <bpmn:sequenceFlow id="reviewNotSuccessful" sourceRef="reviewSuccessful_gw" targetRef="invoiceNotProcessed" />
    <bpmn:sequenceFlow id="reviewSuccessful" sourceRef="reviewSuccessful_gw" targetRef="approveInvoice" />
    <bpmn:sequenceFlow id="SequenceFlow_2" sourceRef="prepareBankTransfer" targetRef="ServiceTask_1" />
    <bpmn:sequenceFlow id="SequenceFlow_3" sourceRef="ServiceTask_1" targetRef="invoiceProcessed" />
  </bpmn:process>
</bpmn:definitions>
"""

# Parallel split/join around a sub-process, plus an event-based gateway race.
# The <outgoing> order of eventGw (timer first) differs from document order.
GATEWAYS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<definitions xmlns="http://www.omg.org/spec/BPMN/20100524/MODEL" id="defs">
  <process id="orders">
    <startEvent id="start" />
    <parallelGateway id="fork" />
    <task id="taskA" name="Check stock" />
    <task id="taskB" name="Check credit" />
    <subProcess id="sub" name="Collect payment">
      <startEvent id="subStart" />
      <task id="subTask" />
      <endEvent id="subEnd" />
      <sequenceFlow id="s1" sourceRef="subStart" targetRef="subTask" />
      <sequenceFlow id="s2" sourceRef="subTask" targetRef="subEnd" />
    </subProcess>
    <parallelGateway id="join" />
    <eventBasedGateway id="eventGw">
      <outgoing>toTimer</outgoing>
      <outgoing>toMessage</outgoing>
    </eventBasedGateway>
    <intermediateCatchEvent id="messageEvent" />
    <intermediateCatchEvent id="timerEvent" />
    <inclusiveGateway id="merge" />
    <endEvent id="end" />
    <sequenceFlow id="f1" sourceRef="start" targetRef="fork" />
    <sequenceFlow id="f2" sourceRef="fork" targetRef="taskA" />
    <sequenceFlow id="f3" sourceRef="fork" targetRef="taskB" />
    <sequenceFlow id="f4" sourceRef="taskA" targetRef="join" />
    <sequenceFlow id="f5" sourceRef="taskB" targetRef="sub" />
    <sequenceFlow id="f6" sourceRef="sub" targetRef="join" />
    <sequenceFlow id="f7" sourceRef="join" targetRef="eventGw" />
    <sequenceFlow id="toMessage" sourceRef="eventGw" targetRef="messageEvent" />
    <sequenceFlow id="toTimer" sourceRef="eventGw" targetRef="timerEvent" />
    <sequenceFlow id="f8" sourceRef="timerEvent" targetRef="merge" />
    <sequenceFlow id="f9" sourceRef="messageEvent" targetRef="merge" />
    <sequenceFlow id="f10" sourceRef="merge" targetRef="end" />
  </process>
</definitions>
"""


@pytest.fixture
def invoice_xml() -> str:
    """Return the Camunda invoice receipt process as BPMN XML."""
    return INVOICE_XML


@pytest.fixture
def gateways_xml() -> str:
    """Return a process exercising join, event-based gateways and a sub-process."""
    return GATEWAYS_XML


@pytest.fixture
def make_graph():
    """Return a factory building a graph from edges; unlisted nodes default to PLAIN."""

    def _make(edges: list[tuple[str, str]], kinds: dict[str, NodeKind] | None = None) -> ProcessGraph:
        all_kinds: dict[str, NodeKind] = {}
        for source, target in edges:
            all_kinds.setdefault(source, NodeKind.PLAIN)
            all_kinds.setdefault(target, NodeKind.PLAIN)
        all_kinds.update(kinds or {})
        return ProcessGraph.from_edges(all_kinds, edges)

    return _make


@pytest.fixture
def make_response():
    """Return a factory for canned requests.Response objects."""

    def _make(status_code: int = 200, body: object | None = None, raw: bytes | None = None) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        if raw is not None:
            response._content = raw
        else:
            response._content = json.dumps(body).encode("utf-8") if body is not None else b""
        return response

    return _make
